"""Heuristic removal of structural boilerplate from student papers.

Processing flow:
1. Unify line endings and strip trailing whitespace from every line.
2. Drop a cover page that precedes the first body heading.
3. Drop a table of contents block (heading plus page-numbered entries).
4. Truncate trailing appendix sections.
5. Collapse runs of blank lines.

Every step is a line filter, so the output is never longer than the input.
Detection is pattern based; when nothing matches the text passes through.
"""

import re
from typing import ClassVar

from plagcheck.logging.logger import Log
from plagcheck.normalization.base import BaseNormalizer


class ContentNormalizer(BaseNormalizer):
    """Removes title page, table of contents and appendices (Russian/English)."""

    _BODY_START_RE: ClassVar[re.Pattern[str]] = re.compile(
        r"^\s*(?:\d+\.?\s*)?"
        r"(введение|реферат|аннотация|содержание|оглавление"
        r"|abstract|introduction|contents|table of contents)"
        r"\s*[.:]?\s*$",
        re.IGNORECASE,
    )
    _COVER_MARKER_RE: ClassVar[re.Pattern[str]] = re.compile(
        r"министерств|университет|институт|академи|кафедр|факультет"
        r"|выполнил|проверил|руководител|студент|курсов\w* работ|дипломн\w* работ"
        r"|university|institute|department|faculty|submitted by|supervisor|student",
        re.IGNORECASE,
    )
    _CITY_YEAR_RE: ClassVar[re.Pattern[str]] = re.compile(
        r"^\s*[A-ZА-ЯЁ][\w\s.\-]{1,40}[\s,]+(?:19|20)\d{2}\s*(?:г\.?)?\s*$"
    )
    _TOC_HEADING_RE: ClassVar[re.Pattern[str]] = re.compile(
        r"^\s*(содержание|оглавление|contents|table of contents)\s*[.:]?\s*$",
        re.IGNORECASE,
    )
    _TOC_ENTRY_RE: ClassVar[re.Pattern[str]] = re.compile(
        r"^\s*\S.{0,200}?(?:\s|\.{2,}|…+|_{2,})\s*\d{1,4}\s*$"
    )
    _APPENDIX_RE: ClassVar[re.Pattern[str]] = re.compile(
        r"^\s*(?:(?:приложение|appendix)\s+[A-ZА-ЯЁ0-9]{1,3}\b\s*[.:)\-–—]?(?:\s+[^.]*)?"
        r"|приложения|appendices)\s*$",
        re.IGNORECASE,
    )

    TITLE_SCAN_LINES: ClassVar[int] = 40
    TOC_SCAN_LINES: ClassVar[int] = 200
    APPENDIX_MAX_LINE_LENGTH: ClassVar[int] = 80
    APPENDIX_MIN_OFFSET_RATIO: ClassVar[float] = 0.5

    def normalize(self, text: str) -> str:
        if not text:
            return ""
        lines = [line.rstrip() for line in text.replace("\r\n", "\n").replace("\r", "\n").split("\n")]
        original_count = len(lines)

        lines = self._strip_title_page(lines)
        lines = self._strip_table_of_contents(lines)
        lines = self._strip_appendices(lines)
        result = self._collapse_blank_lines(lines)

        Log.debug(
            "Normalized content",
            lines_before=original_count,
            lines_after=result.count("\n") + 1 if result else 0,
        )
        return result

    def _strip_title_page(self, lines: list[str]) -> list[str]:
        seen_non_empty = 0
        for index, line in enumerate(lines):
            if not line.strip():
                continue
            seen_non_empty += 1
            if seen_non_empty > self.TITLE_SCAN_LINES:
                break
            if not self._BODY_START_RE.match(line):
                continue
            if index > 0 and self._looks_like_cover(lines[:index]):
                return lines[index:]
            break
        return lines

    def _looks_like_cover(self, lines: list[str]) -> bool:
        return any(
            self._COVER_MARKER_RE.search(line) or self._CITY_YEAR_RE.match(line)
            for line in lines
        )

    def _strip_table_of_contents(self, lines: list[str]) -> list[str]:
        for index, line in enumerate(lines[: self.TOC_SCAN_LINES]):
            if not self._TOC_HEADING_RE.match(line):
                continue
            end = index + 1
            entries = 0
            while end < len(lines):
                candidate = lines[end]
                if not candidate.strip():
                    end += 1
                    continue
                if not self._TOC_ENTRY_RE.match(candidate):
                    break
                entries += 1
                end += 1
            if entries == 0:
                return lines
            return lines[:index] + lines[end:]
        return lines

    def _strip_appendices(self, lines: list[str]) -> list[str]:
        total = sum(len(line) + 1 for line in lines)
        threshold = total * self.APPENDIX_MIN_OFFSET_RATIO
        offset = 0
        for index, line in enumerate(lines):
            if (
                offset >= threshold
                and len(line.strip()) <= self.APPENDIX_MAX_LINE_LENGTH
                and self._APPENDIX_RE.match(line)
            ):
                return lines[:index]
            offset += len(line) + 1
        return lines

    @staticmethod
    def _collapse_blank_lines(lines: list[str]) -> str:
        collapsed: list[str] = []
        for line in lines:
            if not line.strip():
                if collapsed and collapsed[-1] == "":
                    continue
                collapsed.append("")
                continue
            collapsed.append(line)
        return "\n".join(collapsed).strip()
