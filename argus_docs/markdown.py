from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

_FRONTMATTER_RE = re.compile(r"\A---[ \t]*\r?\n(.*?)^---[ \t]*\r?$", re.DOTALL | re.MULTILINE)
_FENCE_RE = re.compile(r"^\s{0,3}(```|~~~)")
_INLINE_CODE_RE = re.compile(r"`+[^`]*`+")
_LINK_RE = re.compile(r"(!?)\[([^\]]*)\]\(([^)]*)\)")
_TITLE_RE = re.compile(r"""^(".*"|'.*')$""")


@dataclass(frozen=True)
class MarkdownFile:
    path: Path
    content: str

    @property
    def frontmatter(self) -> str | None:
        return extract_frontmatter(self.content)

    @property
    def filename(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class Link:
    line_no: int
    text: str
    target: str
    is_image: bool
    raw: str


def extract_frontmatter(content: str) -> str | None:
    """Return the text between the leading `---` lines, or None.

    An empty block (`---` immediately followed by `---`) returns "" so callers
    can tell "no block" apart from "block without fields".
    """

    if not content:
        return None
    m = _FRONTMATTER_RE.match(content.lstrip("\ufeff"))
    if not m:
        return None
    return m.group(1).rstrip("\r\n")


def has_field(block: str, name: str) -> bool:
    """Line-prefix test: some line of the block starts with `name:`."""

    return re.search(rf"^{re.escape(name)}:", block, re.MULTILINE) is not None


def iter_links(content: str) -> Iterator[Link]:
    """Yield inline links and images outside fenced code blocks and code spans."""

    in_fence: str | None = None
    for line_no, line in enumerate(content.splitlines(), 1):
        fence = _FENCE_RE.match(line)
        if fence:
            marker = fence.group(1)
            if in_fence is None:
                in_fence = marker
            elif in_fence == marker:
                in_fence = None
            continue
        if in_fence is not None:
            continue

        text = _INLINE_CODE_RE.sub("", line)
        for m in _LINK_RE.finditer(text):
            yield Link(
                line_no=line_no,
                text=m.group(2),
                target=m.group(3),
                is_image=m.group(1) == "!",
                raw=m.group(0),
            )


def is_well_formed_target(target: str) -> bool:
    """Superficial check on a link destination.

    Accepts `url`, `url "title"`, `url 'title'` and `<url with spaces>`.
    """

    t = target.strip()
    if not t:
        return False
    if t.startswith("<"):
        return t.endswith(">") and len(t) > 2
    parts = t.split(None, 1)
    if len(parts) == 1:
        return True
    return bool(_TITLE_RE.match(parts[1].strip()))


def read_markdown(path: str | Path) -> MarkdownFile:
    """Read a markdown file as UTF-8 (a leading BOM is dropped).

    Raises OSError / UnicodeDecodeError; callers decide how to report them.
    """

    p = Path(path)
    return MarkdownFile(path=p, content=p.read_text(encoding="utf-8-sig"))
