"""LCOV format parser.

LCOV is a plain text format with one directive per line:
- SF:<source file path>
- DA:<line>,<hit count>[,<checksum>]
- BRDA:<line>,<block>,<branch>,<taken>   (taken is a count or '-')
- end_of_record

Other directives (TN, FN, FNDA, LF, LH, BRF, BRH, ...) are skipped, so
function-level coverage is not collected. Bazel's combined report
(``bazel coverage --combined_report=lcov``) uses this format.
"""

import asyncio
import os

from bazelplane.config.constants import DEFAULT_YIELD_EVERY_LINES
from bazelplane.testing.coverage.models import (
    BranchHit,
    CoverageParseError,
    FileCoverageRecord,
)
from bazelplane.testing.coverage.paths import resolve_source_path

_NOT_EXECUTED = "-"


def _as_text(data: str | bytes) -> str:
    if isinstance(data, str):
        text = data
    elif isinstance(data, (bytes, bytearray, memoryview)):
        try:
            text = bytes(data).decode("utf-8")
        except UnicodeDecodeError as e:
            raise CoverageParseError(f"Coverage data is not valid UTF-8: {e}") from e
    else:
        raise CoverageParseError(f"Expected coverage text, got {type(data).__name__}")
    return text.removeprefix("\ufeff")


def _parse_line_data(fields: str) -> tuple[int, int] | None:
    # DA:line,hits[,checksum]
    parts = fields.split(",")
    if len(parts) < 2:
        return None
    try:
        line_num = int(parts[0])
        hits = int(parts[1])
    except ValueError:
        return None
    if line_num < 1 or hits < 0:
        return None
    return line_num, hits


def _parse_branch_data(fields: str) -> BranchHit | None:
    # BRDA:line,block,branch,taken; the branch part may itself contain commas
    head = fields.split(",", 2)
    if len(head) < 3 or "," not in head[2]:
        return None
    branch_id, taken_text = head[2].rsplit(",", 1)
    try:
        line_num = int(head[0])
        taken = None if taken_text == _NOT_EXECUTED else int(taken_text)
    except ValueError:
        return None
    if line_num < 1 or (taken is not None and taken < 0):
        return None
    return BranchHit(line=line_num, block_id=head[1], branch_id=branch_id, taken=taken)


async def parse_lcov(
    base_dir: str | os.PathLike[str],
    data: str | bytes,
    *,
    yield_every: int = DEFAULT_YIELD_EVERY_LINES,
) -> list[FileCoverageRecord]:
    """Parse LCOV text into per-file coverage records.

    Args:
        base_dir: Directory that relative ``SF:`` paths are resolved against.
        data: LCOV text, or UTF-8 encoded bytes.
        yield_every: Lines scanned between yields to the event loop. Does not
            affect the result.

    Returns:
        One record per ``SF:`` section closed by ``end_of_record``, in input order.

    Raises:
        CoverageParseError: If ``data`` is not text or not valid UTF-8.
            Malformed lines are never an error; they are dropped.
    """
    if yield_every < 1:
        raise ValueError(f"yield_every must be >= 1, got {yield_every}")

    text = _as_text(data)
    records: list[FileCoverageRecord] = []
    current: FileCoverageRecord | None = None

    for index, raw_line in enumerate(text.splitlines(), start=1):
        if index % yield_every == 0:
            await asyncio.sleep(0)

        line = raw_line.strip()

        if line.startswith("SF:"):
            # An unterminated previous section is dropped
            reference = line[3:].strip()
            current = (
                FileCoverageRecord(path=resolve_source_path(reference, base_dir))
                if reference
                else None
            )
        elif current is None:
            continue
        elif line.startswith("DA:"):
            parsed = _parse_line_data(line[3:])
            if parsed is not None:
                line_num, hits = parsed
                current.lines[line_num] = hits
        elif line.startswith("BRDA:"):
            branch = _parse_branch_data(line[5:])
            if branch is not None:
                current.branches.append(branch)
        elif line == "end_of_record":
            current.lines = dict(sorted(current.lines.items()))
            records.append(current)
            current = None

    return records
