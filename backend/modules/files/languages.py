"""Editor language inference from file names."""

EXTENSION_LANGUAGES = {
    "js": "javascript",
    "jsx": "javascript",
    "ts": "typescript",
    "tsx": "typescript",
    "py": "python",
    "html": "html",
    "css": "css",
    "scss": "scss",
    "json": "json",
    "md": "markdown",
    "xml": "xml",
    "sql": "sql",
    "yaml": "yaml",
    "yml": "yaml",
    "sh": "shell",
    "bash": "shell",
    "php": "php",
    "java": "java",
    "cpp": "cpp",
    "c": "c",
    "cs": "csharp",
    "go": "go",
    "rs": "rust",
    "rb": "ruby",
    "swift": "swift",
    "kt": "kotlin",
    "dart": "dart",
}

DEFAULT_LANGUAGE = "plaintext"


def language_for(filename: str) -> str:
    """Guess the editor language from a file extension."""
    if "." not in filename:
        return DEFAULT_LANGUAGE
    ext = filename.rsplit(".", 1)[1].lower()
    return EXTENSION_LANGUAGES.get(ext, DEFAULT_LANGUAGE)
