from diagramkit.dsl.sanitizer import (
    sanitize_label,
    sanitize_fragment,
    sanitize_title,
    truncate_label,
)
from diagramkit.dsl.cleaner import clean_mermaid

__all__ = [
    "sanitize_label",
    "sanitize_fragment",
    "sanitize_title",
    "truncate_label",
    "clean_mermaid",
]
