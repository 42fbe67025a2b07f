"""
Manual overrides: curated suggestions that skip validation.

Stored as a JSON array of suggestion records. They are appended to the
generated suggestions both in the review file and in the synced collection.
"""

import json
from pathlib import Path
from typing import List, Optional, Union

from suggestions.errors import OverridesError
from suggestions.models import Suggestion

BUNDLED_OVERRIDES = Path(__file__).parent / "manual_overrides.json"


def load_overrides(path: Optional[Union[str, Path]] = None) -> List[Suggestion]:
    """
    Load manual overrides.

    Args:
        path: JSON file to read. Defaults to the bundled manual_overrides.json.

    Raises:
        OverridesError: The file is missing, not JSON, or not an array.
        pydantic.ValidationError: A record is not suggestion-shaped.
    """
    path = Path(path) if path else BUNDLED_OVERRIDES
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise OverridesError("Manual overrides file not found", path=str(path), original_error=e) from e
    except json.JSONDecodeError as e:
        raise OverridesError("Manual overrides file is not valid JSON", path=str(path), original_error=e) from e

    if not isinstance(raw, list):
        raise OverridesError(f"Manual overrides must be a JSON array: {path}", path=str(path))

    return [Suggestion.model_validate(record) for record in raw]
