"""Helpers for reading whitespace-separated statistics files."""

from itertools import islice


def read_fields(path):
    """Yield each line of *path* split on whitespace, up to the first blank line."""
    with open(path, encoding="utf-8", errors="replace") as stream:
        for line in stream:
            words = line.split()
            if not words:
                return
            yield words


def get_stats_lines(stat_file, line_count):
    """Return at most *line_count* lines of *stat_file*, stopping at an empty line."""
    lines = []
    with open(stat_file, encoding="utf-8", errors="replace") as stream:
        for line in islice(stream, max(line_count, 0)):
            line = line.rstrip("\n")
            if not line:
                break
            lines.append(line)
    return lines


def steady_time_second(t1, t2):
    """Return the number of seconds from monotonic time *t2* to *t1*."""
    return float(t1 - t2)