"""
Mansahay RAG - Chat Tool Calls

Function calls emitted by the hosted chat model, parsed into one typed
model per tool and routed through a single dispatcher.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from mansahay_rag.core.exceptions import ValidationError
from mansahay_rag.core.logging import LoggerMixin
from mansahay_rag.core.types import utcnow


# =============================================================================
# Argument enums
# =============================================================================

class RiskLevel(str, Enum):
    STABLE = "STABLE"
    ELEVATED = "ELEVATED"
    DISTRESS = "DISTRESS"
    HIGH_RISK = "HIGH_RISK"


class ActivityType(str, Enum):
    BREATHING = "breathing"
    JOURNALING = "journaling"
    GROUNDING = "grounding"
    ART = "art"


class AssessmentType(str, Enum):
    PHQ9 = "PHQ9"
    GAD7 = "GAD7"
    SLEEP = "SLEEP"


class MusicCategory(str, Enum):
    ALL = "All"
    NATURE = "Nature"
    AMBIENCE = "Ambience"
    WEATHER = "Weather"
    ANIMALS = "Animals"


class MusicAction(str, Enum):
    PLAY = "PLAY"
    PAUSE = "PAUSE"
    CHANGE_TRACK = "CHANGE_TRACK"


class ResourceType(str, Enum):
    REPORT = "report"
    JOURNAL = "journal"
    FILE = "file"
    IMAGE = "image"


# =============================================================================
# Tool arguments
# =============================================================================

class _ToolArgs(BaseModel):
    # The model sends camelCase keys
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class EmergencyArgs(_ToolArgs):
    risk_level: RiskLevel = Field(alias="riskLevel")
    reason: str


class RealtimeAnalysisArgs(_ToolArgs):
    level: RiskLevel
    sentiment: str
    reason: str


class CopingActivityArgs(_ToolArgs):
    type: ActivityType
    focus: str


class FindProfessionalArgs(_ToolArgs):
    specialty: str
    time_preference: Optional[str] = Field(default=None, alias="timePreference")


class BookAppointmentArgs(_ToolArgs):
    doctor_name: str = Field(alias="doctorName")
    time: str
    reason: Optional[str] = None


class StartAssessmentArgs(_ToolArgs):
    assessment_type: AssessmentType = Field(alias="assessmentType")


class QueryMusicArgs(_ToolArgs):
    query: Optional[str] = None
    filter: MusicCategory = MusicCategory.ALL


class ControlMusicArgs(_ToolArgs):
    action: MusicAction
    query: Optional[str] = None


class SaveResourceArgs(_ToolArgs):
    title: str
    content: str
    type: ResourceType


class ReadResourceArgs(_ToolArgs):
    resource_id: str = Field(alias="resourceId")


# =============================================================================
# Tool calls
# =============================================================================

class TriggerEmergencyProtocol(BaseModel):
    name: Literal["triggerEmergencyProtocol"]
    args: EmergencyArgs


class UpdateRealtimeAnalysis(BaseModel):
    name: Literal["updateRealtimeAnalysis"]
    args: RealtimeAnalysisArgs


class SuggestCopingActivity(BaseModel):
    name: Literal["suggestCopingActivity"]
    args: CopingActivityArgs


class FindProfessional(BaseModel):
    name: Literal["findProfessional"]
    args: FindProfessionalArgs


class BookAppointment(BaseModel):
    name: Literal["bookAppointment"]
    args: BookAppointmentArgs


class StartAssessment(BaseModel):
    name: Literal["startAssessment"]
    args: StartAssessmentArgs


class QueryMusicLibrary(BaseModel):
    name: Literal["queryMusicLibrary"]
    args: QueryMusicArgs


class ControlMusicPlayer(BaseModel):
    name: Literal["controlMusicPlayer"]
    args: ControlMusicArgs


class SaveResource(BaseModel):
    name: Literal["saveResource"]
    args: SaveResourceArgs


class ReadResource(BaseModel):
    name: Literal["readResource"]
    args: ReadResourceArgs


ToolCall = Annotated[
    Union[
        TriggerEmergencyProtocol,
        UpdateRealtimeAnalysis,
        SuggestCopingActivity,
        FindProfessional,
        BookAppointment,
        StartAssessment,
        QueryMusicLibrary,
        ControlMusicPlayer,
        SaveResource,
        ReadResource,
    ],
    Field(discriminator="name"),
]

_tool_call_adapter: TypeAdapter[ToolCall] = TypeAdapter(ToolCall)

# Tools whose effect happens in the client; the model only needs an acknowledgement
UI_TOOLS = (
    TriggerEmergencyProtocol,
    UpdateRealtimeAnalysis,
    SuggestCopingActivity,
    BookAppointment,
    StartAssessment,
    ControlMusicPlayer,
    SaveResource,
)

ACKNOWLEDGEMENT = {"status": "success", "note": "Action processed"}


def parse_tool_call(name: str, args: Optional[dict[str, Any]] = None) -> ToolCall:
    """
    Parse a raw function call into its typed variant.

    Raises:
        ValidationError: If the tool is unknown or its arguments are invalid
    """
    try:
        return _tool_call_adapter.validate_python({"name": name, "args": args or {}})
    except PydanticValidationError as e:
        first = e.errors()[0]
        if first["type"] == "union_tag_invalid":
            raise ValidationError(f"Unknown tool: {name}", field="name")
        location = ".".join(str(part) for part in first["loc"])
        raise ValidationError(
            f"Invalid arguments for {name}: {first['msg']}",
            field=location,
        )


# =============================================================================
# Directory data
# =============================================================================

class Doctor(BaseModel):
    id: str
    name: str
    specialty: str
    rating: float = 0.0
    location: str = ""
    price: str = ""
    slots: list[str] = Field(default_factory=list)


class Track(BaseModel):
    title: str
    url: str
    category: str
    tags: list[str] = Field(default_factory=list)


class VaultResource(BaseModel):
    id: str
    title: str
    type: ResourceType = ResourceType.FILE
    content: str = ""
    mime_type: Optional[str] = None
    date: datetime = Field(default_factory=utcnow)


class ToolDispatcher(LoggerMixin):
    """Executes parsed tool calls against the doctor directory, music library and vault."""

    def __init__(
        self,
        doctors: Optional[list[Doctor]] = None,
        tracks: Optional[list[Track]] = None,
        resources: Optional[list[VaultResource]] = None,
    ):
        self.doctors = doctors or []
        self.tracks = tracks or []
        self.resources = resources or []

    def dispatch(self, call: ToolCall) -> Any:
        """Run a tool call and return the response sent back to the model."""
        self.logger.debug("Dispatching tool call", tool=call.name)

        if isinstance(call, FindProfessional):
            return self._find_professional(call.args)
        elif isinstance(call, QueryMusicLibrary):
            return self._query_music_library(call.args)
        elif isinstance(call, ReadResource):
            return self._read_resource(call.args)
        elif isinstance(call, UI_TOOLS):
            return dict(ACKNOWLEDGEMENT)
        else:
            raise ValidationError(f"Unhandled tool: {call.name}", field="name")

    def handle(self, name: str, args: Optional[dict[str, Any]] = None) -> Any:
        """Parse and dispatch a raw function call."""
        return self.dispatch(parse_tool_call(name, args))

    def _find_professional(self, args: FindProfessionalArgs) -> dict[str, Any]:
        specialty = args.specialty.lower()
        matches = [d for d in self.doctors if specialty in d.specialty.lower()]

        if args.time_preference:
            preference = args.time_preference.lower()
            matches = [
                d for d in matches
                if any(preference in slot.lower() for slot in d.slots)
            ]

        if not matches:
            return {"count": 0, "note": "No doctors found matching criteria."}

        return {
            "count": len(matches),
            "doctors": [
                {
                    "name": d.name,
                    "specialty": d.specialty,
                    "location": d.location,
                    "availableSlots": d.slots,
                    "price": d.price,
                }
                for d in matches
            ],
            "note": "Present these options to the user.",
        }

    def _query_music_library(self, args: QueryMusicArgs) -> Any:
        tracks = self.tracks

        if args.filter != MusicCategory.ALL:
            tracks = [t for t in tracks if t.category == args.filter.value]

        if args.query:
            q = args.query.lower()
            tracks = [
                t for t in tracks
                if q in t.title.lower()
                or any(q in tag for tag in t.tags)
                or q in t.category.lower()
            ]

        if not tracks:
            return {"count": 0, "note": "No tracks found matching your criteria."}

        return [
            {"title": t.title, "category": t.category, "tags": t.tags}
            for t in tracks
        ]

    def _read_resource(self, args: ReadResourceArgs) -> dict[str, Any]:
        found = next((r for r in self.resources if r.id == args.resource_id), None)
        if found is None:
            return {"error": "Resource not found in vault."}

        return {
            "title": found.title,
            "type": found.type.value,
            "content": "Image data retrieved." if found.type == ResourceType.IMAGE else found.content,
            "date": found.date.isoformat(),
        }
