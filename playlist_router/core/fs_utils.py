import json
import os
from pathlib import Path
import tempfile
from typing import Any, Callable, Optional


def write_json(path: str | Path, data: Any) -> None:
    """
    Atomically replace `path` with `data` as JSON, creating missing parent
    directories. The playlist store is rewritten on every save, so
    readers must see either the old document or the new one.
    """
    target_path = Path(path)
    target_path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_path_str = tempfile.mkstemp(
        dir=str(target_path.parent),
        prefix=target_path.name,
        suffix=".tmp",
    )
    tmp_path = Path(tmp_path_str)

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, target_path)
    except Exception:
        tmp_path.unlink(missing_ok=True)
        raise


def read_json(
    path: str | Path,
    default: Any = None,
    *,
    on_error: Optional[Callable[[Exception], None]] = None,
) -> Any:
    """Parsed JSON at `path`; `default` when missing or invalid (on_error sees why)."""
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError:
        return default
    except json.JSONDecodeError as e:
        if on_error:
            on_error(e)
        return default
