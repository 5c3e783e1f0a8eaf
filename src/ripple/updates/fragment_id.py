"""Fragment identifier parsing.

A fragment identifier is either a bare template name (``"index"``) or a
template plus a named region inside it (``"index :: todos"``).
"""

from dataclasses import dataclass

SEPARATOR = "::"


@dataclass(frozen=True, slots=True)
class FragmentRef:
    """A parsed fragment identifier.

    Attributes:
        template: Template name (left of the first separator, trimmed).
        region: Region inside the template, or None for the whole template.

    """

    template: str
    region: str | None = None

    def __str__(self) -> str:
        if self.region is None:
            return self.template
        return f"{self.template} {SEPARATOR} {self.region}"


def parse_fragment_id(fragment_id: str) -> FragmentRef:
    """Split *fragment_id* on the first ``::``.

    Whitespace around both parts is trimmed.  A missing or blank region
    means the whole template is rendered.
    """
    template, sep, region = fragment_id.partition(SEPARATOR)
    template = template.strip()
    if not sep:
        return FragmentRef(template=template)
    region = region.strip()
    return FragmentRef(template=template, region=region or None)


def has_separator(fragment_id: str) -> bool:
    """True if *fragment_id* names a region explicitly."""
    return SEPARATOR in fragment_id
