"""Vault path helpers."""


def ensure_md_extension(path: str) -> str:
    """Append the .md extension unless the path already has it.

    Args:
        path: Vault-relative note path

    Returns:
        Path ending with .md
    """
    if path.endswith(".md"):
        return path
    return f"{path}.md"
