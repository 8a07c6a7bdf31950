"""Detect phrases, habits and communication style in conversations.

The regex lexicon is plain data: a list of (category, key, pattern)
triples compiled once at import. Counting walks the table, so adding a
pattern never touches the counting code.
"""

import re
from collections import namedtuple

from .models import Dataset, PatternAnalysis, PromptRecord
from .parser import get_assistant_text

PATTERN_LIBRARY_VERSION = 1

StylePattern = namedtuple("StylePattern", ["category", "key", "pattern"])

# Things the assistant says far too often
CLAUDE_PHRASES = [
    ("youre_right", re.compile(r"you'?re\s+(absolutely\s+)?right", re.I)),
    ("let_me", re.compile(r"let me", re.I)),
    ("apologize", re.compile(r"I apologize", re.I)),
    ("great_question", re.compile(r"great question", re.I)),
    ("happy_to", re.compile(r"I'?d be happy to", re.I)),
    ("certainly", re.compile(r"certainly", re.I)),
    ("understand", re.compile(r"I understand", re.I)),
    ("thats_great", re.compile(r"that'?s a great", re.I)),
]

STYLE_CATEGORIES = [
    "yelling",
    "polite",
    "impatient",
    "nitpicky",
    "vague",
    "detailed",
    "curious",
    "commanding",
]

_USER_PATTERN_TABLE = [
    # Frustration
    ("yelling", "multi_exclaim", r"!!+", 0),
    ("yelling", "multi_question", r"\?\?+", 0),
    ("yelling", "all_caps", r"[A-Z]{4,}", 0),
    ("yelling", "frustration_words", r"\b(NO|WRONG|FIX|BROKEN|BUG|ERROR|FAIL|SHIT|FUCK|DAMN|WTF|UGH)\b", re.I),
    ("yelling", "please_just", r"please\s+just", re.I),
    ("yelling", "why_not", r"why\s+(isn'?t|doesn'?t|won'?t|can'?t|didn'?t)", re.I),
    ("yelling", "still_broken", r"this\s+(is\s+)?(still|doesn'?t|isn'?t|won'?t)", re.I),
    ("yelling", "again", r"again\b", re.I),
    ("yelling", "already_told", r"already told you", re.I),

    # Gratitude
    ("polite", "please", r"\bplease\b", re.I),
    ("polite", "thanks", r"\bthank(s| you)\b", re.I),
    ("polite", "sorry", r"\bsorry\b", re.I),
    ("polite", "appreciate", r"\bappreciate\b", re.I),
    ("polite", "great_job", r"\bgreat job\b", re.I),
    ("polite", "perfect", r"\bperfect\b", re.I),
    ("polite", "awesome", r"\bawesome\b", re.I),
    ("polite", "nice", r"\bnice\b", re.I),

    # Speed
    ("impatient", "just", r"\bjust\b", re.I),
    ("impatient", "quick", r"\bquick(ly)?\b", re.I),
    ("impatient", "asap", r"\basap\b", re.I),
    ("impatient", "now", r"\bnow\b", re.I),
    ("impatient", "hurry", r"\bhurry\b", re.I),
    ("impatient", "fast", r"\bfast(er)?\b", re.I),

    # Perfectionism
    ("nitpicky", "actually", r"\bactually\b", re.I),
    ("nitpicky", "specifically", r"\bspecifically\b", re.I),
    ("nitpicky", "exactly", r"\bexactly\b", re.I),
    ("nitpicky", "precisely", r"\bprecisely\b", re.I),
    ("nitpicky", "not_quite", r"not\s+quite", re.I),
    ("nitpicky", "almost_but", r"almost\s+but", re.I),
    ("nitpicky", "close_but", r"close\s+but", re.I),
    ("nitpicky", "minor", r"\bminor\b", re.I),
    ("nitpicky", "tweak", r"\btweak\b", re.I),
    ("nitpicky", "adjust", r"\badjust\b", re.I),
    ("nitpicky", "instead", r"\binstead\b", re.I),
    ("nitpicky", "rather", r"\brather\b", re.I),

    # Low effort
    ("vague", "short_prompt", r"^.{1,15}$", re.M),
    ("vague", "do_it", r"\bdo it\b", re.I),
    ("vague", "fix_it", r"\bfix it\b", re.I),
    ("vague", "make_it_work", r"\bmake it work\b", re.I),
    ("vague", "idk", r"\bidk\b", re.I),
    ("vague", "whatever", r"\bwhatever\b", re.I),
    ("vague", "you_know", r"\byou know what i mean\b", re.I),
    ("vague", "etc", r"\betc\.?\b", re.I),

    # Thorough
    ("detailed", "context", r"\bcontext\b", re.I),
    ("detailed", "background", r"\bbackground\b", re.I),
    ("detailed", "requirements", r"\brequirements?\b", re.I),
    ("detailed", "specification", r"\bspecification\b", re.I),
    ("detailed", "steps", r"step\s*\d", re.I),
    ("detailed", "numbered_list", r"\d\.\s+\w", 0),
    ("detailed", "ordering", r"\b(first|second|third|finally)\b", re.I),

    # Questions
    ("curious", "why", r"\bwhy\b", re.I),
    ("curious", "how", r"\bhow\b", re.I),
    ("curious", "what_if", r"\bwhat if\b", re.I),
    ("curious", "explain", r"\bcould you explain\b", re.I),
    ("curious", "whats_the", r"\bwhat'?s the\b", re.I),
    ("curious", "is_it_possible", r"\bis (it|this|that) (possible|okay|correct)", re.I),

    # Direct orders
    ("commanding", "imperative", r"^(do|make|create|build|write|fix|add|remove|delete|change|update)\b", re.I | re.M),
    ("commanding", "now_do", r"\bnow\s+(do|make|fix|add)", re.I),
    ("commanding", "i_need", r"\bi need\b", re.I),
    ("commanding", "i_want", r"\bi want\b", re.I),
]

# \b, \w and \d only know ASCII letters and digits: "ñnow" contains "now"
USER_PATTERNS = [
    StylePattern(category, key, re.compile(pattern, flags | re.ASCII))
    for category, key, pattern, flags in _USER_PATTERN_TABLE
]

QUESTION_RE = re.compile(r"\?")
EXCLAMATION_RE = re.compile(r"!")
EMOJI_RE = re.compile("[\U0001F300-\U0001F9FF]")
CODE_BLOCK_RE = re.compile(r"```")
URL_RE = re.compile(r"https?://")

LONGEST_PROMPT_CHARS = 500
# Prompts this short are ignored when looking for the shortest one
MIN_SHORTEST_PROMPT = 10


def count_matches(text: str, pattern) -> int:
    """Number of non-overlapping matches of a compiled pattern."""
    return sum(1 for _ in pattern.finditer(text))


def empty_user_style() -> dict:
    style = {category: {} for category in STYLE_CATEGORIES}
    for p in USER_PATTERNS:
        style[p.category][p.key] = 0
    return style


def analyze_patterns(dataset: Dataset) -> PatternAnalysis:
    """Analyze user style and assistant phrases across the dataset."""
    claude_phrases = {key: 0 for key, _ in CLAUDE_PHRASES}
    user_style = empty_user_style()

    longest = None
    shortest = None
    question_count = 0
    exclamation_count = 0
    emoji_count = 0
    code_block_count = 0
    url_count = 0

    for entry in dataset.user_entries:
        text = entry.content
        length = len(text)

        if length > (longest.length if longest else 0):
            longest = PromptRecord(text=text[:LONGEST_PROMPT_CHARS], length=length)
        if length > MIN_SHORTEST_PROMPT and (shortest is None or length < shortest.length):
            shortest = PromptRecord(text=text, length=length)

        question_count += count_matches(text, QUESTION_RE)
        exclamation_count += count_matches(text, EXCLAMATION_RE)
        emoji_count += count_matches(text, EMOJI_RE)
        code_block_count += count_matches(text, CODE_BLOCK_RE)
        url_count += count_matches(text, URL_RE)

        for p in USER_PATTERNS:
            user_style[p.category][p.key] += count_matches(text, p.pattern)

    for entry in dataset.assistant_entries:
        text = get_assistant_text(entry)
        for key, pattern in CLAUDE_PHRASES:
            claude_phrases[key] += count_matches(text, pattern)

    return PatternAnalysis(
        claude_phrases=claude_phrases,
        # Flat alias of the yelling counts
        user_frustration=dict(user_style["yelling"]),
        user_style=user_style,
        longest_prompt=longest or PromptRecord(),
        shortest_prompt=shortest or PromptRecord(),
        question_count=question_count,
        exclamation_count=exclamation_count,
        emoji_count=emoji_count,
        code_block_count=code_block_count,
        url_count=url_count,
    )


def category_total(patterns: PatternAnalysis, category: str) -> int:
    return sum((patterns.user_style or {}).get(category, {}).values())


STYLE_DESCRIPTIONS = {
    "yelling": "You're... passionate. Very passionate.",
    "polite": "A true gentleman/lady of the terminal.",
    "impatient": "Time is code. Code is money. HURRY.",
    "nitpicky": "Every pixel matters. Every character counts.",
    "vague": "Brief but... mysterious?",
    "detailed": "You write prompts like technical specs.",
    "curious": "Always asking 'but why?' like a 5-year-old.",
    "commanding": "You don't ask. You command.",
}


def get_dominant_style(patterns: PatternAnalysis) -> dict:
    """The style category with the most matches."""
    totals = [(category, category_total(patterns, category)) for category in (patterns.user_style or {})]
    totals.sort(key=lambda item: item[1], reverse=True)
    style, score = totals[0] if totals else ("neutral", 0)

    return {
        "style": style,
        "score": score,
        "description": STYLE_DESCRIPTIONS.get(style, "Your style is unique."),
    }


def get_communication_stats(patterns: PatternAnalysis) -> dict:
    return {
        "yell_count": category_total(patterns, "yelling"),
        "polite_count": category_total(patterns, "polite"),
        "nitpick_count": category_total(patterns, "nitpicky"),
        "vague_count": category_total(patterns, "vague"),
        "command_count": category_total(patterns, "commanding"),
        "curious_count": category_total(patterns, "curious"),
        "question_ratio": patterns.question_count,
    }


PHRASE_NAMES = {
    "youre_right": '"You\'re absolutely right"',
    "let_me": '"Let me..."',
    "apologize": '"I apologize"',
    "great_question": '"Great question!"',
    "happy_to": '"I\'d be happy to"',
    "certainly": '"Certainly"',
    "understand": '"I understand"',
    "thats_great": '"That\'s a great..."',
}


def get_most_common_claude_phrase(patterns: PatternAnalysis) -> str:
    if not patterns.claude_phrases:
        return "None"

    key, count = max(patterns.claude_phrases.items(), key=lambda item: item[1])
    if count == 0:
        return "None"
    return PHRASE_NAMES.get(key, key)


def get_frustration_score(patterns: PatternAnalysis) -> int:
    """Frustration on a 0-100 scale (100+ signals is maximum)."""
    return min(100, sum(patterns.user_frustration.values()))
