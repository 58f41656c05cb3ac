"""Regular-expression matching and `$`-style replacement templates."""

import re


# Matches nothing, used in place of a pattern that fails to compile.
NEVER_MATCHES = re.compile(r"(?!)")

_GROUP_NAME_CHARS = re.compile(r"[A-Za-z0-9_]+")


def expand_template(match: re.Match, template: str) -> str:
    """Expand a replacement template against a single match.

    Supports ``$N`` and ``$name`` (longest run of word characters),
    the braced forms ``${N}`` / ``${name}``, and ``$$`` for a literal
    dollar sign. Unknown or non-participating groups expand to "".
    A ``$`` that does not start a reference is kept literally.
    """
    out: list[str] = []
    i = 0
    length = len(template)

    while i < length:
        ch = template[i]
        if ch != "$" or i + 1 >= length:
            out.append(ch)
            i += 1
            continue

        nxt = template[i + 1]
        if nxt == "$":
            out.append("$")
            i += 2
            continue

        if nxt == "{":
            close = template.find("}", i + 2)
            ref = template[i + 2 : close] if close != -1 else ""
            if close == -1 or not _GROUP_NAME_CHARS.fullmatch(ref):
                out.append(ch)
                i += 1
                continue
            out.append(_group_text(match, ref))
            i = close + 1
            continue

        ref_match = _GROUP_NAME_CHARS.match(template, i + 1)
        if ref_match is None:
            out.append(ch)
            i += 1
            continue

        out.append(_group_text(match, ref_match.group(0)))
        i = ref_match.end()

    return "".join(out)


def _group_text(match: re.Match, ref: str) -> str:
    key: int | str = int(ref) if ref.isdigit() else ref
    try:
        value = match.group(key)
    except IndexError:
        return ""
    return value or ""


class PatternEngine:
    """A compiled match pattern.

    Compilation never raises: an invalid pattern degrades to one that
    matches nothing, so the preview stays renderable mid-edit.
    """

    def __init__(self, regex: re.Pattern, valid: bool = True) -> None:
        self.regex = regex
        self.valid = valid

    @classmethod
    def compile(cls, match_text: str) -> "PatternEngine":
        try:
            return cls(re.compile(match_text))
        except (re.error, OverflowError, RecursionError):
            return cls(NEVER_MATCHES, valid=False)

    def is_match(self, name: str) -> bool:
        return self.regex.search(name) is not None

    def render(self, name: str, replace_text: str) -> str:
        """Apply the replacement template to the first match in ``name``.

        Returns ``name`` unchanged if nothing matches or the template is empty.
        """
        if not replace_text:
            return name

        match = self.regex.search(name)
        if match is None:
            return name

        return name[: match.start()] + expand_template(match, replace_text) + name[match.end() :]
