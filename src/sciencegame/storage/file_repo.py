"""File-based question pool repository using JSON files.

Each pool is one JSON file in the questions directory, and the file stem
is the pool ID:

    questions/basic-chemistry.json
    {
        "name": "Basic Chemistry",
        "questions": [
            {"question_id": "h2o", "prompt": "Formula of water?",
             "correct_answer": "H2O", "weight": 2, "time_limit": 20}
        ]
    }
"""

import json
from pathlib import Path
from typing import Optional

from .repository import QuestionPoolRepository


class FileQuestionPoolRepository(QuestionPoolRepository):
    """JSON file-based question pool repository.

    The directory is only read; a missing directory holds no pools.
    """

    def __init__(self, questions_path: str | Path = "questions"):
        """Initialize repository.

        Args:
            questions_path: Path to the question pools directory
        """
        self.questions_path = Path(questions_path)

    def _get_pool_path(self, pool_id: str) -> Path:
        """Get path to pool file."""
        return self.questions_path / f"{pool_id}.json"

    def list_pools(self) -> list[dict]:
        """Return metadata for all available pools."""
        if not self.questions_path.is_dir():
            return []
        pools = []
        for path in self.questions_path.glob("*.json"):
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
                pools.append({
                    "id": path.stem,
                    "name": data.get("name", path.stem),
                    "question_count": len(data.get("questions", [])),
                })
        return sorted(pools, key=lambda x: x["name"])

    def get_pool(self, pool_id: str) -> Optional[dict]:
        """Load complete pool by ID."""
        path = self._get_pool_path(pool_id)
        if not path.is_file():
            return None
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
            data["id"] = pool_id
            return data
