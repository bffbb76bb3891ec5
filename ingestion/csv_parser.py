"""
ingestion/csv_parser.py

Lightweight CSV parser producing typed records.

The first non-empty line is the header. Every following non-empty line is
tokenized on commas while respecting double-quoted spans; a line whose
token count differs from the header's column count is dropped whole and
never partially ingested. No exception is raised for malformed input: an
empty document simply yields no records.
"""

from __future__ import annotations

import re

from ingestion.coercion import DataValue, Record, parse_number

# A token is either a quoted span or a run of non-comma, non-whitespace
# characters, and must be followed by a comma or the end of the line.
_TOKEN_PATTERN = re.compile(r'(".*?"|[^",\s]+)(?=\s*,|\s*$)')
_EDGE_QUOTES = re.compile(r'^"|"$')


def _non_empty_lines(text: str) -> list[str]:
    return [line for line in text.split("\n") if line.strip() != ""]


def strip_quotes(value: str) -> str:
    """Remove one leading and one trailing double quote, if present."""

    return _EDGE_QUOTES.sub("", value)


def parse_header(line: str) -> list[str]:
    return [strip_quotes(name.strip()) for name in line.split(",")]


def tokenize_line(line: str) -> list[str]:
    """
    Split one data line into raw field tokens.

    Falls back to a plain comma split when the quoted-field pattern finds
    no token at all (for example a line made only of commas).
    """

    tokens = _TOKEN_PATTERN.findall(line)
    if tokens:
        return tokens
    return line.split(",")


def coerce_value(raw: str) -> DataValue:
    """
    Type a trimmed field value.

    Priority: numeric literal -> number, ``true``/``false`` (any case) ->
    bool, otherwise the string itself. An empty string stays ``""``.
    """

    if raw != "":
        number = parse_number(raw)
        if number is not None:
            return number

    lowered = raw.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return raw


def parse_csv(text: str) -> list[Record]:
    """
    Parse raw CSV *text* into records keyed by header name.

    Records keep input line order. Lines with a field count different from
    the header are skipped silently.
    """

    lines = _non_empty_lines(text)
    if not lines:
        return []

    headers = parse_header(lines[0])
    records: list[Record] = []

    for line in lines[1:]:
        tokens = tokenize_line(line)
        if len(tokens) != len(headers):
            continue

        record: Record = {}
        for header, token in zip(headers, tokens):
            record[header] = coerce_value(strip_quotes(token).strip())
        records.append(record)

    return records


def count_data_lines(text: str) -> int:
    """Return the number of non-empty lines following the header."""

    return max(0, len(_non_empty_lines(text)) - 1)
