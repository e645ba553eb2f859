from constants.rulebook import (
    DEFAULT_RULEBOOK_PATH,
    KeywordRule,
    Rulebook,
    load_rulebook,
    parse_rulebook,
    reload_rulebook,
)

__all__ = [
    "DEFAULT_RULEBOOK_PATH",
    "KeywordRule",
    "Rulebook",
    "load_rulebook",
    "parse_rulebook",
    "reload_rulebook",
]
