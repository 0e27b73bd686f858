"""Structured view over a markdown document split into level-2 sections."""

from __future__ import annotations

from dataclasses import dataclass, field

SECTION_PREFIX = "## "


@dataclass(slots=True)
class Section:
    heading: str
    body: str = ""

    def append(self, block: str) -> None:
        """Append a block to the end of the section body, separated by a blank line."""

        existing = self.body.rstrip("\n")
        block = block.strip("\n")
        if existing:
            self.body = f"{existing}\n\n{block}\n\n"
        else:
            self.body = f"\n{block}\n\n"

    def render(self) -> str:
        return f"{SECTION_PREFIX}{self.heading}\n{self.body}"


@dataclass(slots=True)
class MarkdownDocument:
    """A document preamble followed by an ordered list of named sections."""

    preamble: str = ""
    sections: list[Section] = field(default_factory=list)

    @classmethod
    def parse(cls, text: str) -> "MarkdownDocument":
        document = cls()
        current: Section | None = None
        preamble: list[str] = []
        body: list[str] = []

        for line in text.splitlines(keepends=True):
            if line.startswith(SECTION_PREFIX):
                if current is not None:
                    current.body = "".join(body)
                    document.sections.append(current)
                current = Section(heading=line[len(SECTION_PREFIX):].strip())
                body = []
            elif current is None:
                preamble.append(line)
            else:
                body.append(line)

        if current is not None:
            current.body = "".join(body)
            document.sections.append(current)
        document.preamble = "".join(preamble)
        return document

    def find(self, heading: str) -> Section | None:
        """Return the first section whose heading matches exactly."""

        for section in self.sections:
            if section.heading == heading:
                return section
        return None

    @property
    def headings(self) -> list[str]:
        return [section.heading for section in self.sections]

    def render(self) -> str:
        text = self.preamble + "".join(section.render() for section in self.sections)
        return text.rstrip("\n") + "\n"


__all__ = ["MarkdownDocument", "Section"]
