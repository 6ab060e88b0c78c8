from vfs_tools_mcp.tools.base import PathError

ROOT = "/"


def normalize_path(raw: object) -> str:
    """
    Normalizes a user-provided path into a virtual path rooted at '/'.

    Args:
        raw: The path string provided by the model.

    Returns:
        The normalized path: absolute, no repeated slashes, no '.' or '..'
        segments and no trailing slash (except for the root itself).

    Raises:
        PathError: If the path is empty, relative, or escapes the root.
    """
    if not isinstance(raw, str) or raw == "":
        raise PathError("Path must be a non-empty string.", reason="empty")
    if not raw.startswith("/"):
        raise PathError(f"Path '{raw}' must be absolute (start with '/').", reason="not_absolute")

    segments: list[str] = []
    for segment in raw.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if not segments:
                raise PathError(f"Path '{raw}' escapes the root directory.", reason="escapes")
            segments.pop()
            continue
        segments.append(segment)

    return ROOT + "/".join(segments)


def path_segments(path: str) -> list[str]:
    """Splits a normalized path into its segments. The root has none."""
    return [segment for segment in path.split("/") if segment]


def parent_path(path: str) -> str:
    """Returns the parent directory of a normalized path; the root is its own parent."""
    segments = path_segments(path)
    return ROOT + "/".join(segments[:-1])


def is_within(path: str, directory: str) -> bool:
    """True if `path` lies strictly below `directory` (both normalized)."""
    if directory == ROOT:
        return path != ROOT
    return path.startswith(directory + "/")
