"""Text-based import directive insertion."""

import logging
import re
from typing import Optional

from ..cancellation import CancellationToken
from ..models import Document
from .protocols import ImportEdit

logger = logging.getLogger(__name__)


class TextImportInserter:
    """Inserts import directives into the leading directive block of a document.

    Directives are rendered from ``template`` (e.g. ``using {namespace};``).
    The new directive goes at its sorted position among the existing ones;
    with ``place_system_first`` namespaces under ``system_prefix`` sort
    ahead of the rest. Inserting a directive that is already present leaves
    the document unchanged.
    """

    def __init__(self, template: str = "using {namespace};", system_prefix: str = "System"):
        self.template = template
        self.system_prefix = system_prefix
        head, _, tail = template.partition("{namespace}")
        self._directive_re = re.compile(
            r"^\s*" + re.escape(head.strip()) + r"\s*([\w.]+)\s*" + re.escape(tail.strip()) + r"\s*$"
        )

    def render(self, namespace: str) -> str:
        return self.template.format(namespace=namespace)

    def insert_import(
        self,
        document: Document,
        name_parts: tuple[str, ...],
        place_system_first: bool,
        cancellation: Optional[CancellationToken] = None,
    ) -> ImportEdit:
        """Insert the directive for namespace ``name_parts`` into ``document``.

        An empty ``name_parts`` (global namespace) needs no directive.
        """
        if cancellation is not None:
            cancellation.raise_if_cancelled()
        if not name_parts:
            return ImportEdit(None, document)

        namespace = ".".join(name_parts)
        directive = self.render(namespace)
        lines = document.text.splitlines(keepends=True)

        # Locate the leading directive block, skipping blank and comment lines
        existing: list[tuple[int, str]] = []
        block_end = 0
        first_code = len(lines)
        for i, line in enumerate(lines):
            match = self._directive_re.match(line)
            if match:
                if match.group(1) == namespace:
                    logger.debug(f"Directive already present in {document.id}: {directive}")
                    return ImportEdit(directive, document)
                existing.append((i, match.group(1)))
                block_end = i + 1
            elif line.strip() == "" or line.lstrip().startswith(("//", "#")):
                continue
            else:
                first_code = i
                break

        key = self._sort_key(namespace, place_system_first)
        insert_at = block_end if existing else first_code
        for i, other in existing:
            if key < self._sort_key(other, place_system_first):
                insert_at = i
                break

        newline = "\r\n" if lines and lines[0].endswith("\r\n") else "\n"
        new_lines = list(lines)
        if insert_at > 0 and not new_lines[insert_at - 1].endswith(("\n", "\r")):
            new_lines[insert_at - 1] += newline
        inserted = [directive + newline]
        if not existing and insert_at < len(new_lines) and new_lines[insert_at].strip():
            # Separate a brand new directive block from the code below it
            inserted.append(newline)
        new_lines[insert_at:insert_at] = inserted

        if cancellation is not None:
            cancellation.raise_if_cancelled()
        return ImportEdit(directive, document.with_text("".join(new_lines)))

    def _sort_key(self, namespace: str, place_system_first: bool) -> tuple[int, str]:
        if place_system_first and (
            namespace == self.system_prefix or namespace.startswith(self.system_prefix + ".")
        ):
            return (0, namespace.lower())
        return (1, namespace.lower())
