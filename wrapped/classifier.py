"""Deterministic persona classification.

Four independent axes (language, time of day, communication style, tool
workflow) are classified from the metrics, then one of them is picked as
the headline. No LLM needed; this is also the fallback whenever the LLM
judge is switched off or fails, so every function here is total and
side-effect free.
"""

from typing import Optional

from .models import (
    DeterministicPersonas,
    PatternAnalysis,
    Persona,
    PersonaResult,
    Timeline,
    WrappedMetrics,
)
from .patterns import category_total


# Language personas

TYPE_GUARDIAN = Persona(
    id="TYPE_GUARDIAN",
    name="The Type Guardian",
    emoji="🛡️",
    tagline="'any' is a four-letter word",
    roast="You've written more interfaces than you've had conversations this year.",
    compliment="Runtime errors fear you. Your types are so tight, bugs don't even try.",
)
CHAOS_WIZARD = Persona(
    id="CHAOS_WIZARD",
    name="The Chaos Wizard",
    emoji="🧙",
    tagline="undefined is not a function... yet",
    roast="Living life without types? That's not bravery, that's a death wish.",
    compliment="While others debate types, you've already shipped and moved on. Speed demon.",
)
SNAKE_CHARMER = Persona(
    id="SNAKE_CHARMER",
    name="The Snake Charmer",
    emoji="🐍",
    tagline="import antigravity",
    roast="pip install talent? Oh wait, that's actually what you're doing.",
    compliment="You make complex look simple. That's not easy—that's mastery.",
)
BORROW_CHECKER = Persona(
    id="BORROW_CHECKER",
    name="The Borrow Checker",
    emoji="🦀",
    tagline="Fearless concurrency, fearful compilation",
    roast="You spent more time fighting the compiler than your actual enemies.",
    compliment="You chose the hard path. Zero-cost abstractions, zero bugs, zero compromises.",
)
GOPHER = Persona(
    id="GOPHER",
    name="The Gopher",
    emoji="🐹",
    tagline="if err != nil { forever }",
    roast="50% of your code is 'if err != nil'. The other 50% is return.",
    compliment="You build backends that handle millions of requests without breaking a sweat.",
)
ENTERPRISE_ARCHITECT = Persona(
    id="ENTERPRISE_ARCHITECT",
    name="The Enterprise Architect",
    emoji="☕",
    tagline="AbstractSingletonProxyFactoryBean",
    roast="Your class names are longer than most people's functions.",
    compliment="You build systems that outlive companies, survive acquisitions, and just keep running.",
)
MEMORY_WHISPERER = Persona(
    id="MEMORY_WHISPERER",
    name="The Memory Whisperer",
    emoji="🔧",
    tagline="Who needs garbage collection?",
    roast="Segfaults are just your code's way of saying hello.",
    compliment="You understand computers at a level most devs never will.",
)
GEM_COLLECTOR = Persona(
    id="GEM_COLLECTOR",
    name="The Gem Collector",
    emoji="💎",
    tagline="Everything is an object, even your feelings",
    roast="Rails is not a personality trait. Or is it?",
    compliment="Developer happiness matters, and you've optimized for it.",
)
LEGACY_KEEPER = Persona(
    id="LEGACY_KEEPER",
    name="The Legacy Keeper",
    emoji="🐘",
    tagline="Still powering 80% of the web",
    roast="2024 called, they want... actually no, 2004 called.",
    compliment="You keep the internet running. Literally.",
)
APPLE_EVANGELIST = Persona(
    id="APPLE_EVANGELIST",
    name="The Apple Evangelist",
    emoji="🍎",
    tagline="It just works (after 47 optionals)",
    roast="You've spent more time unwrapping optionals than presents.",
    compliment="Your apps are so polished they belong in a museum.",
)
JAVA_ESCAPEE = Persona(
    id="JAVA_ESCAPEE",
    name="The Java Escapee",
    emoji="🏃",
    tagline="Null safety or bust",
    roast="You spent 6 months learning Kotlin to avoid typing 'public static void'.",
    compliment="You took the best of Java and left the rest. Smart.",
)
TERMINAL_DWELLER = Persona(
    id="TERMINAL_DWELLER",
    name="The Terminal Dweller",
    emoji="💻",
    tagline="GUI is for the weak",
    roast="Your bash history is longer than most people's codebases.",
    compliment="You automate what others do manually. Efficiency incarnate.",
)
DATA_WHISPERER = Persona(
    id="DATA_WHISPERER",
    name="The Data Whisperer",
    emoji="🗃️",
    tagline="SELECT * FROM problems",
    roast="You think in tables. Your therapist is concerned.",
    compliment="You extract insights others don't even know exist.",
)
PIXEL_PUSHER = Persona(
    id="PIXEL_PUSHER",
    name="The Pixel Pusher",
    emoji="🎨",
    tagline="It's centered, I swear",
    roast="You've spent more time on CSS than actual programming.",
    compliment="You make the web beautiful. Someone has to.",
)
DOCUMENTARIAN = Persona(
    id="DOCUMENTARIAN",
    name="The Documentarian",
    emoji="📝",
    tagline="README.md is my love language",
    roast="You've written more docs than code. That's... actually fine.",
    compliment="Future you and your teammates thank you. Seriously.",
)
CONFIG_WIZARD = Persona(
    id="CONFIG_WIZARD",
    name="The Config Wizard",
    emoji="⚙️",
    tagline="It's just JSON all the way down",
    roast="You've spent more time configuring than coding.",
    compliment="A well-configured system is a happy system.",
)
YAML_WIZARD = Persona(
    id="CONFIG_WIZARD",
    name="The Config Wizard",
    emoji="⚙️",
    tagline="Indentation is my religion",
    roast="One wrong space and everything breaks. You live dangerously.",
    compliment="You make infrastructure as code look easy.",
)
POLYGLOT = Persona(
    id="POLYGLOT",
    name="The Polyglot",
    emoji="🌍",
    tagline="Jack of all trades, master of... some",
    roast="You switch languages like you switch tabs. Commitment issues much?",
    compliment="You're a one-person engineering team. Drop you into any stack and you'll ship.",
)

# File extension -> persona. Related extensions share one persona.
LANGUAGE_PERSONAS = {
    "ts": TYPE_GUARDIAN,
    "tsx": TYPE_GUARDIAN,
    "js": CHAOS_WIZARD,
    "jsx": CHAOS_WIZARD,
    "py": SNAKE_CHARMER,
    "rs": BORROW_CHECKER,
    "go": GOPHER,
    "java": ENTERPRISE_ARCHITECT,
    "c": MEMORY_WHISPERER,
    "cpp": MEMORY_WHISPERER,
    "rb": GEM_COLLECTOR,
    "php": LEGACY_KEEPER,
    "swift": APPLE_EVANGELIST,
    "kt": JAVA_ESCAPEE,
    "sh": TERMINAL_DWELLER,
    "bash": TERMINAL_DWELLER,
    "sql": DATA_WHISPERER,
    "html": PIXEL_PUSHER,
    "css": PIXEL_PUSHER,
    "md": DOCUMENTARIAN,
    "json": CONFIG_WIZARD,
    "yaml": YAML_WIZARD,
}

DEFAULT_LANGUAGE_PERSONA = POLYGLOT


# Time personas

TIME_PERSONAS = {
    "VAMPIRE": Persona(
        id="VAMPIRE",
        name="The Vampire",
        emoji="🧛",
        tagline="The best bugs are fixed at 3am",
        roast="Your circadian rhythm filed a missing persons report.",
        compliment="Darkness is where you thrive. You're not awake late—everyone else sleeps too early.",
    ),
    "EARLY_BIRD": Persona(
        id="EARLY_BIRD",
        name="The Early Bird",
        emoji="🐦",
        tagline="First commits before first coffee",
        roast="5am coding? Your alarm clock is judging you.",
        compliment="By the time others check Slack, you've already crushed it. Absolute machine.",
    ),
    "MORNING_PERSON": Persona(
        id="MORNING_PERSON",
        name="The Morning Person",
        emoji="☀️",
        tagline="Peak productivity before noon",
        roast="A morning person in tech? That's basically a cryptid.",
        compliment="Fresh mind, fresh code. You solve problems before lunch that others struggle with all day.",
    ),
    "LUNCH_CODER": Persona(
        id="LUNCH_CODER",
        name="The Lunch Coder",
        emoji="🍕",
        tagline="Debugging between bites",
        roast="Your keyboard needs therapy after what you've put it through.",
        compliment="Peak flow state hits when others are on break. You're built different.",
    ),
    "NINE_TO_FIVER": Persona(
        id="NINE_TO_FIVER",
        name="The 9-to-5er",
        emoji="💼",
        tagline="Professional hours, professional code",
        roast="Leaving at 5pm? Must be nice in fantasy land.",
        compliment="Boundaries. Discipline. You ship great code without burning out. That's the real flex.",
    ),
    "AFTER_HOURER": Persona(
        id="AFTER_HOURER",
        name="The After-Hourer",
        emoji="🌆",
        tagline="Side project energy",
        roast="Your side projects have more commits than some companies' main products.",
        compliment="Day job pays bills. After hours? That's where your genius lives.",
    ),
    "NIGHT_OWL": Persona(
        id="NIGHT_OWL",
        name="The Night Owl",
        emoji="🦉",
        tagline="Dark mode isn't a preference, it's a lifestyle",
        roast="Doctors hate this one weird trick (it's your sleep schedule).",
        compliment="The quiet hours are when legends ship. No meetings, no distractions, just pure creation.",
    ),
    "WEEKEND_WARRIOR": Persona(
        id="WEEKEND_WARRIOR",
        name="The Weekend Warrior",
        emoji="⚔️",
        tagline="Who needs a social life?",
        roast="Your social calendar says 'git commit' every Saturday.",
        compliment="While others brunch, you build. That's why you're ahead.",
    ),
    "MACHINE": Persona(
        id="MACHINE",
        name="The Machine",
        emoji="🤖",
        tagline="Sleep is for the weak",
        roast="We checked—you're not actually a bot. We're concerned.",
        compliment="All hours. All days. You don't stop. You're not human—you're a force of nature.",
    ),
}

# (start hour inclusive, end hour exclusive, persona id)
PEAK_HOUR_RANGES = [
    (0, 5, "VAMPIRE"),
    (5, 8, "EARLY_BIRD"),
    (8, 12, "MORNING_PERSON"),
    (12, 14, "LUNCH_CODER"),
    (14, 18, "NINE_TO_FIVER"),
    (18, 21, "AFTER_HOURER"),
    (21, 24, "NIGHT_OWL"),
]


# Communication style personas

STYLE_PERSONAS = {
    "CURIOUS": Persona(
        id="CURIOUS",
        name="The Curious Mind",
        emoji="🤔",
        tagline="Why? How? What if?",
        roast="You ask more questions than a congressional hearing.",
        compliment="Curiosity built everything great. Your questions lead to breakthroughs.",
    ),
    "YELLER": Persona(
        id="YELLER",
        name="The Yeller",
        emoji="🔥",
        tagline="CAPS LOCK IS CRUISE CONTROL FOR COOL",
        roast="Your keyboard's caps lock is legally a weapon at this point.",
        compliment="That passion? That's what ships features. You CARE. Loudly.",
    ),
    "MINIMALIST": Persona(
        id="MINIMALIST",
        name="The Minimalist",
        emoji="💨",
        tagline="fix it",
        roast="Hemingway wrote more than you. And he was known for being brief.",
        compliment="No wasted words. No wasted time. Maximum efficiency unlocked.",
    ),
    "NOVELIST": Persona(
        id="NOVELIST",
        name="The Novelist",
        emoji="📖",
        tagline="Context is everything",
        roast="Your prompts have chapters. Some have appendices.",
        compliment="You give perfect context. AI dreams of users like you.",
    ),
    "DIPLOMAT": Persona(
        id="DIPLOMAT",
        name="The Diplomat",
        emoji="🎩",
        tagline="Please and thank you, always",
        roast="You say 'please' to an AI. It doesn't have feelings... yet.",
        compliment="Manners make the engineer. You'll be fine when AI takes over.",
    ),
    "ENTHUSIAST": Persona(
        id="ENTHUSIAST",
        name="The Enthusiast",
        emoji="⚡",
        tagline="This is amazing!!!",
        roast="Your exclamation marks could power a small city.",
        compliment="Your energy is unmatched. Every team needs someone who's actually excited.",
    ),
    "ARCHITECT": Persona(
        id="ARCHITECT",
        name="The Architect",
        emoji="📐",
        tagline="Let me explain the full context...",
        roast="Your prompts need a table of contents.",
        compliment="You plan like a general. Execute like a sniper. Systems thinker.",
    ),
    "COMMANDER": Persona(
        id="COMMANDER",
        name="The Commander",
        emoji="⚔️",
        tagline="Do it. Now.",
        roast="No please. No thank you. Just results. Terrifying and effective.",
        compliment="Zero ambiguity. Zero wasted time. You command, things happen.",
    ),
}


# Workflow personas

WORKFLOW_PERSONAS = {
    "EXPLORER": Persona(
        id="EXPLORER",
        name="The Explorer",
        emoji="🔍",
        tagline="Read first, code later",
        roast="You've read more code than you've written. At least you're thorough?",
        compliment="You understand before you change. That's how seniors think.",
    ),
    "BUILDER": Persona(
        id="BUILDER",
        name="The Builder",
        emoji="🏗️",
        tagline="From zero to deployed",
        roast="Greenfield addiction is real. Legacy code is for peasants, right?",
        compliment="You don't fix problems—you build solutions. That's founder energy.",
    ),
    "REFACTORER": Persona(
        id="REFACTORER",
        name="The Refactorer",
        emoji="✨",
        tagline="Make it work, then make it right",
        roast="Your code has more drafts than a novelist's manuscript.",
        compliment="You take good and make it legendary. Code in your hands evolves.",
    ),
    "TERMINAL_LORD": Persona(
        id="TERMINAL_LORD",
        name="The Terminal Lord",
        emoji="👑",
        tagline="GUI is optional",
        roast="Your bash history is longer than your relationship history.",
        compliment="The command line bends to your will. Raw power, no abstractions.",
    ),
    "DETECTIVE": Persona(
        id="DETECTIVE",
        name="The Detective",
        emoji="🕵️",
        tagline="grep is my best friend",
        roast="You search for bugs like you're searching for your will to live.",
        compliment="Nothing escapes you. Bugs hide—you find them. Every. Single. Time.",
    ),
    "FULL_STACK": Persona(
        id="FULL_STACK",
        name="The Full Stack",
        emoji="🎯",
        tagline="Jack of all tools, master of flow",
        roast="You use everything but commit to nothing. Swiss army knife energy.",
        compliment="Frontend, backend, infra—you flow through all layers. True engineer.",
    ),
}


# Axis classifiers

def detect_language_persona(languages: dict) -> Persona:
    """Persona for the most-used file extension.

    With 3+ languages and no language above half of all files, the user is
    a polyglot whatever the top extension is.
    """
    ranked = sorted(languages.items(), key=lambda item: item[1], reverse=True)
    if not ranked:
        return DEFAULT_LANGUAGE_PERSONA

    top_lang, top_count = ranked[0]
    total = sum(count for _, count in ranked)
    top_percent = top_count / total * 100 if total else 0

    if len(ranked) >= 3 and top_percent < 50:
        return DEFAULT_LANGUAGE_PERSONA

    return LANGUAGE_PERSONAS.get(top_lang.lower(), DEFAULT_LANGUAGE_PERSONA)


def detect_time_persona(hour_distribution: list, weekend_percent: float) -> Persona:
    """Persona for when the user codes.

    Args:
        hour_distribution: 24 prompt counts by hour.
        weekend_percent: Share of activity on Saturday + Sunday, 0-100.
    """
    total = sum(hour_distribution)
    if total == 0:
        return TIME_PERSONAS["NINE_TO_FIVER"]

    if weekend_percent > 50:
        return TIME_PERSONAS["WEEKEND_WARRIOR"]

    peak_count = max(hour_distribution)
    peak_hour = hour_distribution.index(peak_count)

    # No hour stands out: activity is spread across the whole day
    if peak_count / total * 100 < 12:
        return TIME_PERSONAS["MACHINE"]

    for start, end, persona_id in PEAK_HOUR_RANGES:
        if start <= peak_hour < end:
            return TIME_PERSONAS[persona_id]
    return TIME_PERSONAS["NIGHT_OWL"]


def detect_style_persona(patterns: PatternAnalysis, avg_prompt_length: float, total_prompts: int) -> Persona:
    """Persona for how the user talks. First matching rule wins."""
    def percent(count: int) -> float:
        return count / total_prompts * 100 if total_prompts else 0.0

    yell_percent = percent(category_total(patterns, "yelling"))
    polite_percent = percent(category_total(patterns, "polite"))
    question_percent = percent(patterns.question_count or 0)
    exclamation_percent = percent(patterns.exclamation_count or 0)

    if yell_percent > 5:
        return STYLE_PERSONAS["YELLER"]
    if question_percent > 30:
        return STYLE_PERSONAS["CURIOUS"]
    if avg_prompt_length < 30:
        return STYLE_PERSONAS["MINIMALIST"]
    if avg_prompt_length > 300:
        return STYLE_PERSONAS["NOVELIST"]
    if polite_percent > 20:
        return STYLE_PERSONAS["DIPLOMAT"]
    if exclamation_percent > 15:
        return STYLE_PERSONAS["ENTHUSIAST"]
    if avg_prompt_length > 150:
        return STYLE_PERSONAS["ARCHITECT"]

    return STYLE_PERSONAS["COMMANDER"]


def detect_workflow_persona(tool_counts: dict) -> Persona:
    """Persona for which tools dominate the sessions."""
    read = tool_counts.get("Read", 0)
    write = tool_counts.get("Write", 0)
    edit = tool_counts.get("Edit", 0)
    bash = tool_counts.get("Bash", 0)
    search = tool_counts.get("Grep", 0) + tool_counts.get("Glob", 0)

    total = read + write + edit + bash + search
    if total == 0:
        return WORKFLOW_PERSONAS["FULL_STACK"]

    if bash / total > 0.4:
        return WORKFLOW_PERSONAS["TERMINAL_LORD"]
    if search / total > 0.35:
        return WORKFLOW_PERSONAS["DETECTIVE"]
    if read / total > 0.4:
        return WORKFLOW_PERSONAS["EXPLORER"]
    if write / total > 0.35:
        return WORKFLOW_PERSONAS["BUILDER"]
    if edit / total > 0.35:
        return WORKFLOW_PERSONAS["REFACTORER"]

    return WORKFLOW_PERSONAS["FULL_STACK"]


# Combination

def select_primary(language: Persona, time: Persona, style: Persona, workflow: Persona) -> Persona:
    """Pick the most striking axis to headline the report."""
    if style.id == "YELLER":
        return style
    if time.id in ("VAMPIRE", "WEEKEND_WARRIOR"):
        return time
    if style.id in ("MINIMALIST", "NOVELIST"):
        return style
    if workflow.id == "TERMINAL_LORD":
        return workflow
    return language


# (axis, id, axis, id) -> text
COMBO_ROASTS = [
    (("time", "VAMPIRE"), ("style", "YELLER"),
     "You're screaming at an AI at 3am. Your neighbors are filing complaints."),
    (("language", "TYPE_GUARDIAN"), ("style", "MINIMALIST"),
     "You type 'fix types' and expect miracles. That's not how TypeScript works."),
    (("workflow", "TERMINAL_LORD"), ("time", "VAMPIRE"),
     "Your terminal history from 4am reads like a cry for help."),
    (("style", "NOVELIST"), ("language", "SNAKE_CHARMER"),
     "Your prompts have more imports than a Python file. Which is saying something."),
]

COMBO_COMPLIMENTS = [
    (("time", "EARLY_BIRD"), ("workflow", "BUILDER"),
     "You create before the world wakes up. That's when the best work happens."),
    (("language", "TYPE_GUARDIAN"), ("workflow", "REFACTORER"),
     "Type-safe refactoring. Your future self sends their thanks."),
    (("style", "CURIOUS"), ("workflow", "EXPLORER"),
     "You understand systems deeply before changing them. That's senior energy."),
    (("time", "WEEKEND_WARRIOR"), ("style", "ENTHUSIAST"),
     "Your passion for coding is genuine. That energy is rare and valuable."),
]


def _match_combo(table: list, axes: dict) -> Optional[str]:
    for (axis_a, id_a), (axis_b, id_b), text in table:
        if axes[axis_a].id == id_a and axes[axis_b].id == id_b:
            return text
    return None


def generate_combined_roast(language: Persona, time: Persona, style: Persona, workflow: Persona) -> str:
    axes = {"language": language, "time": time, "style": style, "workflow": workflow}
    return _match_combo(COMBO_ROASTS, axes) or language.roast


def generate_combined_compliment(language: Persona, time: Persona, style: Persona, workflow: Persona) -> str:
    axes = {"language": language, "time": time, "style": style, "workflow": workflow}
    return _match_combo(COMBO_COMPLIMENTS, axes) or f"{language.compliment} {time.compliment}"


def detect_all_personas(
    metrics: WrappedMetrics,
    patterns: PatternAnalysis,
    timeline: Timeline,
) -> DeterministicPersonas:
    """Classify all four axes and pick the headline persona."""
    language = detect_language_persona(metrics.languages)
    time = detect_time_persona(timeline.hourly_heatmap, timeline.weekend_percent or 0)
    style = detect_style_persona(patterns, metrics.avg_prompt_length, metrics.total_prompts)
    workflow = detect_workflow_persona(metrics.tool_counts)

    return DeterministicPersonas(
        language=language,
        time=time,
        style=style,
        workflow=workflow,
        primary=select_primary(language, time, style, workflow),
        combined_roast=generate_combined_roast(language, time, style, workflow),
        combined_compliment=generate_combined_compliment(language, time, style, workflow),
    )


# Axis persona id -> named persona id, so the fallback result looks like the
# LLM judge's output
PERSONA_ID_MAP = {
    "TYPE_GUARDIAN": "THE_ARCHITECT",
    "CHAOS_WIZARD": "THE_SPEEDRUNNER",
    "SNAKE_CHARMER": "THE_EXPLORER",
    "BORROW_CHECKER": "THE_PERFECTIONIST",
    "GOPHER": "THE_BUILDER",
    "ENTERPRISE_ARCHITECT": "THE_ARCHITECT",
    "MEMORY_WHISPERER": "THE_DEBUGGER",
    "GEM_COLLECTOR": "THE_REFACTORER",
    "LEGACY_KEEPER": "THE_MARATHON_RUNNER",
    "APPLE_EVANGELIST": "THE_SPECIALIST",
    "JAVA_ESCAPEE": "THE_SPEEDRUNNER",
    "TERMINAL_DWELLER": "THE_COMMANDER",
    "DATA_WHISPERER": "THE_EXPLORER",
    "PIXEL_PUSHER": "THE_BUILDER",
    "DOCUMENTARIAN": "THE_CONVERSATIONALIST",
    "CONFIG_WIZARD": "THE_ARCHITECT",
    "POLYGLOT": "THE_POLYGLOT",
    "VAMPIRE": "THE_NIGHT_OWL",
    "EARLY_BIRD": "THE_EARLY_BIRD",
    "MORNING_PERSON": "THE_EARLY_BIRD",
    "LUNCH_CODER": "THE_BUILDER",
    "NINE_TO_FIVER": "THE_BUILDER",
    "AFTER_HOURER": "THE_MARATHON_RUNNER",
    "NIGHT_OWL": "THE_NIGHT_OWL",
    "WEEKEND_WARRIOR": "THE_MARATHON_RUNNER",
    "MACHINE": "THE_SPEEDRUNNER",
    "CURIOUS": "THE_EXPLORER",
    "YELLER": "THE_COMMANDER",
    "MINIMALIST": "THE_SPEEDRUNNER",
    "NOVELIST": "THE_ARCHITECT",
    "DIPLOMAT": "THE_CONVERSATIONALIST",
    "ENTHUSIAST": "THE_BUILDER",
    "ARCHITECT": "THE_ARCHITECT",
    "COMMANDER": "THE_COMMANDER",
    "EXPLORER": "THE_EXPLORER",
    "BUILDER": "THE_BUILDER",
    "REFACTORER": "THE_REFACTORER",
    "TERMINAL_LORD": "THE_COMMANDER",
    "DETECTIVE": "THE_DEBUGGER",
    "FULL_STACK": "THE_POLYGLOT",
}

FALLBACK_CONFIDENCE = 0.85


def create_fallback_persona(
    metrics: WrappedMetrics,
    timeline: Timeline,
    patterns: Optional[PatternAnalysis] = None,
) -> PersonaResult:
    """Deterministic PersonaResult for when the LLM judge is unavailable."""
    personas = detect_all_personas(metrics, patterns or PatternAnalysis(), timeline)

    reasoning = (
        f"Language: {personas.language.name}, Time: {personas.time.name}, "
        f"Style: {personas.style.name}, Workflow: {personas.workflow.name}"
    )

    return PersonaResult(
        persona=PERSONA_ID_MAP.get(personas.primary.id, "THE_BUILDER"),
        confidence=FALLBACK_CONFIDENCE,
        reasoning=reasoning,
        secondary_persona=None,
        roast=personas.combined_roast,
        compliment=personas.combined_compliment,
    )
