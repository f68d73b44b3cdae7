"""File extension → language table for backends without language statistics.

Only the file name is consulted, never the content. Extensions not listed
here (and files without an extension) contribute no language.
"""

from pathlib import PurePosixPath
from typing import Iterable

EXTENSION_LANGUAGES: dict[str, str] = {
    # JVM
    ".java": "Java",
    ".kt": "Kotlin",
    ".kts": "Kotlin",
    ".scala": "Scala",
    ".groovy": "Groovy",
    ".gradle": "Groovy",
    ".clj": "Clojure",
    # Go / Rust / native
    ".go": "Go",
    ".rs": "Rust",
    ".c": "C",
    ".h": "C",
    ".cc": "C++",
    ".cpp": "C++",
    ".cxx": "C++",
    ".hpp": "C++",
    ".hh": "C++",
    ".swift": "Swift",
    ".m": "Objective-C",
    # Scripting
    ".py": "Python",
    ".rb": "Ruby",
    ".php": "PHP",
    ".pl": "Perl",
    ".lua": "Lua",
    ".r": "R",
    ".sh": "Shell",
    ".bash": "Shell",
    ".ps1": "PowerShell",
    # Web
    ".js": "JavaScript",
    ".mjs": "JavaScript",
    ".cjs": "JavaScript",
    ".jsx": "JavaScript",
    ".ts": "TypeScript",
    ".tsx": "TypeScript",
    ".html": "HTML",
    ".htm": "HTML",
    ".css": "CSS",
    ".scss": "SCSS",
    ".vue": "Vue",
    # .NET
    ".cs": "C#",
    ".fs": "F#",
    ".vb": "Visual Basic",
    # Functional
    ".hs": "Haskell",
    ".erl": "Erlang",
    ".ex": "Elixir",
    ".exs": "Elixir",
    ".ml": "OCaml",
    ".dart": "Dart",
    # Data / markup
    ".json": "JSON",
    ".xml": "XML",
    ".yaml": "YAML",
    ".yml": "YAML",
    ".toml": "TOML",
    ".sql": "SQL",
    ".md": "Markdown",
}


def language_for_path(path: str) -> str | None:
    return EXTENSION_LANGUAGES.get(PurePosixPath(path).suffix.lower())


def languages_for_paths(paths: Iterable[str]) -> set[str]:
    """Distinct languages recognised among `paths`."""
    languages = set()
    for path in paths:
        language = language_for_path(path)
        if language:
            languages.add(language)
    return languages
