import json
import re
from typing import Any, Dict, List, Optional, Union

_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


def load_json(
    file_path: str, default: Optional[Union[List, Dict]] = None
) -> Union[List, Dict]:
    """
    Load JSON data from a file, returning a default value if it doesn't exist or is invalid.
    Args:
        file_path: Path to JSON file
        default: Default value to return if file doesn't exist or is invalid
    Returns:
        Parsed JSON data or default value
    """
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        return default if default is not None else {}
    except (json.JSONDecodeError, IsADirectoryError):
        return default if default is not None else {}


def save_json(file_path: str, data: Union[List, Dict]) -> None:
    """
    Save data to a JSON file.
    Args:
        file_path: Path to save JSON file
        data: Data to save
    Raises:
        IOError: If file cannot be written
    """
    with open(file_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def extract_json_object(text: str) -> Dict[str, Any]:
    """
    Pull the first JSON object out of free-form model output.

    Models often wrap the payload in prose or a ```json fence; everything
    from the first "{" to the last "}" is taken as the object.
    Args:
        text: Raw response text
    Returns:
        Parsed object
    Raises:
        ValueError: If no JSON object is present or it does not decode
    """
    match = _JSON_OBJECT_RE.search(text or "")
    if not match:
        raise ValueError("Could not find a JSON object in the response")
    data = json.loads(match.group(0))
    if not isinstance(data, dict):
        raise ValueError("Response JSON is not an object")
    return data


def parse_problem_id(value: Any) -> int:
    """
    Coerce a problem number from loosely typed input.

    Examples:
        - 1 -> 1
        - "15" -> 15
        - "15. 3Sum" -> 15
        - None / "?" -> 0
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, float):
        return max(int(value), 0)
    if isinstance(value, str):
        match = re.search(r"\d+", value)
        if match:
            return int(match.group(0))
    return 0


def parse_percentile(value: Any) -> Optional[int]:
    """
    Coerce a percentile estimate into the [1, 100] range.

    Examples:
        - 85 -> 85
        - "90%" -> 90
        - 0 -> 1, 150 -> 100
        - None / "unknown" -> None
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        match = re.search(r"\d+(?:\.\d+)?", value)
        if not match:
            return None
        value = float(match.group(0))
    if not isinstance(value, (int, float)):
        return None
    return min(100, max(1, int(round(value))))
