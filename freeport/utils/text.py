# freeport/utils/text.py
import re

_TAG_RE = re.compile(r"<[^>]*>")


def strip_tags(value: str) -> str:
    """移除 HTML 標籤 (輸入清理用)"""
    return _TAG_RE.sub("", value).strip()


def split_display_name(name: str | None) -> tuple[str, str]:
    """
    "Jane Doe" -> ("Jane", "Doe")
    "Jane Mary Doe" -> ("Jane", "Mary Doe")
    只有一個字時姓氏為空字串
    """
    parts = (name or "").strip().split(None, 1)
    if not parts:
        return "", ""
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1]
