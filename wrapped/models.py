"""Data models for wrapped year-in-review analysis."""

from dataclasses import dataclass, field, asdict
from typing import Optional, Union


# Conversation log entries

@dataclass
class TextBlock:
    """Free-text content block in an assistant message."""
    text: str


@dataclass
class ToolUse:
    """Tool invocation content block in an assistant message."""
    name: str
    input: dict
    id: Optional[str] = None


@dataclass
class Usage:
    input_tokens: int
    output_tokens: int


@dataclass
class UserEntry:
    """A prompt typed by the user."""
    uuid: str
    timestamp: str
    content: str
    session_id: Optional[str] = None
    cwd: Optional[str] = None
    parent_uuid: Optional[str] = None


@dataclass
class AssistantEntry:
    """An assistant reply: ordered text and tool_use blocks."""
    uuid: str
    timestamp: str
    content: list = field(default_factory=list)
    session_id: Optional[str] = None
    usage: Optional[Usage] = None
    parent_uuid: Optional[str] = None


@dataclass
class SummaryEntry:
    """Conversation summary. Ids are not unique."""
    summary: str
    leaf_uuid: Optional[str] = None


Entry = Union[UserEntry, AssistantEntry, SummaryEntry]


# Typed views of tool inputs. Only the tools the metrics care about get a
# dedicated shape, everything else is GenericInput.

@dataclass
class WriteInput:
    content: str
    file_path: Optional[str] = None


@dataclass
class EditInput:
    new_string: str
    file_path: Optional[str] = None


@dataclass
class BashInput:
    command: str


@dataclass
class GenericInput:
    name: str
    input: dict


ToolInput = Union[WriteInput, EditInput, BashInput, GenericInput]


# Collection

@dataclass
class SourceDirectory:
    """A .claude directory selected for analysis."""
    path: str
    project_name: str
    conversation_count: int = 0
    total_size_bytes: int = 0
    is_global: bool = False


@dataclass
class Dataset:
    """Merged, de-duplicated, time-ordered entries from one run."""
    user_entries: list = field(default_factory=list)
    assistant_entries: list = field(default_factory=list)
    summaries: list = field(default_factory=list)
    total_files: int = 0
    directories: list = field(default_factory=list)

    @property
    def entries(self) -> list:
        return [*self.user_entries, *self.assistant_entries, *self.summaries]


# Analysis results

@dataclass
class WrappedMetrics:
    """Flat aggregate statistics for the year."""
    # Volume
    total_prompts: int = 0
    total_responses: int = 0
    total_conversations: int = 0
    total_tokens_in: int = 0
    total_tokens_out: int = 0

    # Code
    lines_written: int = 0
    lines_edited: int = 0
    files_created: int = 0
    files_modified: int = 0
    languages: dict = field(default_factory=dict)

    # Tools
    tool_counts: dict = field(default_factory=dict)
    bash_commands: dict = field(default_factory=dict)

    # Time
    busiest_day: str = ""
    busiest_hour: int = 0
    longest_streak: int = 0
    total_sessions: int = 0
    avg_session_minutes: int = 0

    # Characters
    total_user_chars: int = 0
    total_assistant_chars: int = 0
    avg_prompt_length: int = 0

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "WrappedMetrics":
        return cls(**data)


@dataclass
class PromptRecord:
    text: str = ""
    length: int = 0


@dataclass
class PatternAnalysis:
    """Text-signal counts for assistant phrases and user style."""
    claude_phrases: dict = field(default_factory=dict)
    user_frustration: dict = field(default_factory=dict)
    user_style: dict = field(default_factory=dict)
    longest_prompt: PromptRecord = field(default_factory=PromptRecord)
    shortest_prompt: PromptRecord = field(default_factory=PromptRecord)
    question_count: int = 0
    exclamation_count: int = 0
    emoji_count: int = 0
    code_block_count: int = 0
    url_count: int = 0

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "PatternAnalysis":
        data = dict(data)
        data["longest_prompt"] = PromptRecord(**data.get("longest_prompt", {}))
        data["shortest_prompt"] = PromptRecord(**data.get("shortest_prompt", {}))
        return cls(**data)


@dataclass
class Timeline:
    """Calendar and hour-of-day distributions of user activity."""
    hourly_heatmap: list = field(default_factory=lambda: [0] * 24)
    daily_activity: dict = field(default_factory=dict)
    weekday_totals: list = field(default_factory=lambda: [0] * 7)  # 0 = Sunday
    monthly_trend: list = field(default_factory=lambda: [0] * 12)
    peak_hour: int = 0
    peak_day: str = ""
    late_night_count: int = 0
    weekend_warrior: bool = False
    weekend_percent: float = 0.0
    first_activity: str = "Unknown"
    last_activity: str = "Unknown"

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Timeline":
        return cls(**data)


# Personas

@dataclass
class Persona:
    """One axis classification (language, time, style or workflow)."""
    id: str
    name: str
    emoji: str
    tagline: str
    roast: str
    compliment: str


@dataclass
class DeterministicPersonas:
    language: Persona
    time: Persona
    style: Persona
    workflow: Persona
    primary: Persona
    combined_roast: str
    combined_compliment: str

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "DeterministicPersonas":
        return cls(
            language=Persona(**data["language"]),
            time=Persona(**data["time"]),
            style=Persona(**data["style"]),
            workflow=Persona(**data["workflow"]),
            primary=Persona(**data["primary"]),
            combined_roast=data["combined_roast"],
            combined_compliment=data["combined_compliment"],
        )


@dataclass
class PersonaDefinition:
    """One of the canonical named personas shown in the report."""
    id: str
    name: str
    emoji: str
    tagline: str
    description: str
    image_prompt: str


@dataclass
class PersonaResult:
    """Headline persona, from the LLM judge or the deterministic fallback."""
    persona: str
    confidence: float
    reasoning: str
    secondary_persona: Optional[str]
    roast: str
    compliment: str

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "PersonaResult":
        return cls(**data)


@dataclass
class WrappedReport:
    """Everything the renderer needs."""
    # Identity
    persona: str
    persona_emoji: str
    persona_name: str
    persona_tagline: str
    persona_description: str
    secondary_persona: Optional[str]
    roast: str
    compliment: str

    # Numbers
    metrics: WrappedMetrics
    patterns: PatternAnalysis
    timeline: Timeline

    # Narrative
    year_summary: str
    summaries: list

    # Generated assets
    persona_image_path: Optional[str]
    share_card_path: Optional[str]

    # Meta
    generated_at: str
    version: str
    year: int

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "WrappedReport":
        data = dict(data)
        data["metrics"] = WrappedMetrics.from_dict(data["metrics"])
        data["patterns"] = PatternAnalysis.from_dict(data["patterns"])
        data["timeline"] = Timeline.from_dict(data["timeline"])
        return cls(**data)
