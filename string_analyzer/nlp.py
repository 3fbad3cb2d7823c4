import re
from typing import Any, Callable, Dict, List, Tuple

from string_analyzer.schemas import FilterSet

Transform = Callable[[re.Match[str]], Any]

# Ordered rule table: (field, alternatives).
# Within a rule the first matching alternative wins. Rules run top to bottom and a
# later rule overwrites an earlier one on the same field, so the vowel heuristic
# takes precedence over an explicit "contains <letter>" match.
_RULES: List[Tuple[str, List[Tuple[re.Pattern[str], Transform]]]] = [
    ("is_palindrome", [
        (re.compile(r"palindrome|palindromic"), lambda m: True),
    ]),
    ("word_count", [
        (re.compile(r"single word"), lambda m: 1),
        (re.compile(r"two word|2 word"), lambda m: 2),
        (re.compile(r"three word|3 word"), lambda m: 3),
    ]),
    ("min_length", [
        # strictly longer than N means at least N + 1
        (re.compile(r"longer than (\d+)"), lambda m: int(m.group(1)) + 1),
    ]),
    ("max_length", [
        # strictly shorter than N means at most N - 1; may go negative
        (re.compile(r"shorter than (\d+)"), lambda m: int(m.group(1)) - 1),
    ]),
    ("contains_character", [
        (re.compile(r"contain(?:s|ing)? (?:the letter |)([a-z])"), lambda m: m.group(1)),
    ]),
    ("contains_character", [
        (re.compile(r"first vowel"), lambda m: "a"),
        (re.compile(r"last vowel"), lambda m: "u"),
    ]),
]


def _match_rule(q: str, alternatives: List[Tuple[re.Pattern[str], Transform]]) -> Tuple[bool, Any]:
    for pattern, transform in alternatives:
        m = pattern.search(q)
        if not m:
            continue
        try:
            return True, transform(m)
        except ValueError:
            # e.g. a number past the interpreter's int-conversion digit limit
            continue
    return False, None


def interpret_nl_query(query: str) -> Tuple[FilterSet, str]:
    """Interpret a natural language query into a FilterSet.

    Never fails on text input: a query that matches no rule yields an empty
    FilterSet, i.e. no constraint at all. Conflicting bounds are left for the
    caller to detect (see ``filters.validate_filters``).
    """
    if not isinstance(query, str):
        raise TypeError("query must be a string")

    q = query.lower()
    parsed: Dict[str, Any] = {}

    for field, alternatives in _RULES:
        matched, value = _match_rule(q, alternatives)
        if matched:
            parsed[field] = value

    return FilterSet(**parsed), query
