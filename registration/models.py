# registration/models.py
"""
Team registration schema.

A submission is a tagged union on `teamType`:
- "srm"     -> SrmTeamSubmission    (lead/members carry RA number, NetID, department)
- "non_srm" -> NonSrmTeamSubmission (college details, optional club, college e-mail)

`validate_team_submission()` turns untrusted JSON into one of the two models or
raises SchemaViolationError carrying the first violated rule as a sentence
that is returned verbatim to API clients.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional, Sequence, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic.networks import validate_email

from registration.errors import SchemaViolationError

TEAM_TYPES = ("srm", "non_srm")

# Lead + up to 3 members -> team size 1..4
MAX_EXTRA_MEMBERS = 3


# ─────────────────────────────────────────────────────────────
# Members
# ─────────────────────────────────────────────────────────────

class _Submission(BaseModel):
    # Unknown keys (id, createdAt, ...) are dropped, text is trimmed
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")


class SrmMember(_Submission):
    name: str = Field(..., min_length=1)
    raNumber: str = Field(..., min_length=1)
    netId: str = Field(..., min_length=1)
    dept: str = Field(..., min_length=1)
    contact: int = Field(..., gt=0, strict=True)


class NonSrmMember(_Submission):
    name: str = Field(..., min_length=1)
    collegeId: str = Field(..., min_length=1)
    collegeEmail: str
    contact: int = Field(..., gt=0, strict=True)

    @field_validator("collegeEmail")
    @classmethod
    def _check_college_email(cls, v: str) -> str:
        # Stored as submitted, not in email-validator's normalized form
        validate_email(v)
        return v


# ─────────────────────────────────────────────────────────────
# Team submissions (one model per variant)
# ─────────────────────────────────────────────────────────────

class SrmTeamSubmission(_Submission):
    teamType: Literal["srm"]
    teamName: str = Field(..., min_length=1)
    lead: SrmMember
    members: List[SrmMember] = Field(default_factory=list, max_length=MAX_EXTRA_MEMBERS)


class NonSrmTeamSubmission(_Submission):
    teamType: Literal["non_srm"]
    teamName: str = Field(..., min_length=1)
    collegeName: str = Field(..., min_length=1)
    isClub: bool = Field(False, strict=True)
    clubName: Optional[str] = None
    lead: NonSrmMember
    members: List[NonSrmMember] = Field(default_factory=list, max_length=MAX_EXTRA_MEMBERS)

    @model_validator(mode="after")
    def _club_name_for_clubs(self) -> "NonSrmTeamSubmission":
        if not self.isClub:
            # Only club teams carry a club name
            self.clubName = None
        elif not self.clubName:
            raise ValueError("Club name is required for club teams.")
        return self


TeamSubmission = Annotated[
    Union[SrmTeamSubmission, NonSrmTeamSubmission],
    Field(discriminator="teamType"),
]

_submission_adapter: TypeAdapter = TypeAdapter(TeamSubmission)


# ─────────────────────────────────────────────────────────────
# Listing projection
# ─────────────────────────────────────────────────────────────

class TeamSummary(BaseModel):
    """
    Reduced view of a stored team used by the collection endpoints.
    """
    id: str
    teamName: str
    teamType: str
    leadName: str
    memberCount: int            # lead + members
    createdAt: str
    updatedAt: str


def to_team_summary(team: Dict[str, Any]) -> Dict[str, Any]:
    return TeamSummary(
        id=team["id"],
        teamName=team["teamName"],
        teamType=team["teamType"],
        leadName=team["lead"]["name"],
        memberCount=1 + len(team.get("members") or []),
        createdAt=team["createdAt"],
        updatedAt=team["updatedAt"],
    ).model_dump()


# ─────────────────────────────────────────────────────────────
# Validation entrypoint + human-readable errors
# ─────────────────────────────────────────────────────────────

_FIELD_LABELS = {
    "teamName": "team name",
    "collegeName": "college name",
    "isClub": "club flag",
    "clubName": "club name",
    "lead": "team lead",
    "members": "members",
    "name": "name",
    "raNumber": "RA number",
    "netId": "NetID",
    "dept": "department",
    "contact": "contact number",
    "collegeId": "college ID",
    "collegeEmail": "college email",
}


def _describe(loc: Sequence[Union[str, int]]) -> str:
    """
    ("srm", "members", 1, "netId") -> "Member 2 NetID"
    """
    parts = list(loc)
    if parts and parts[0] in TEAM_TYPES:
        parts = parts[1:]

    words: List[str] = []
    i = 0
    while i < len(parts):
        part = parts[i]
        if part == "members" and i + 1 < len(parts) and isinstance(parts[i + 1], int):
            words.append(f"member {parts[i + 1] + 1}")
            i += 2
            continue
        words.append(_FIELD_LABELS.get(str(part), str(part)))
        i += 1

    text = " ".join(words)
    return text[:1].upper() + text[1:]


def _error_message(error: Dict[str, Any]) -> str:
    kind = error.get("type", "")
    loc = error.get("loc", ())

    if kind in ("union_tag_invalid", "union_tag_not_found"):
        return "Team type must be either 'srm' or 'non_srm'."

    label = _describe(loc)

    if kind in ("missing", "string_too_short"):
        return f"{label} is required."
    if kind == "too_long":
        return f"A team can have at most {MAX_EXTRA_MEMBERS} additional members."
    if kind == "string_type":
        return f"{label} must be text."
    if kind == "list_type":
        return f"{label} must be a list."
    if kind in ("int_type", "int_parsing", "int_from_float", "greater_than"):
        return f"{label} must be a valid phone number."
    if kind in ("bool_type", "bool_parsing"):
        return f"{label} must be true or false."
    if kind in ("model_type", "model_attributes_type", "dict_type"):
        return f"{label} must be an object."
    if kind == "value_error":
        if loc and loc[-1] == "collegeEmail":
            return f"{label} must be a valid email address."
        ctx = error.get("ctx") or {}
        return str(ctx.get("error") or error.get("msg", "Invalid payload."))

    msg = error.get("msg", "Invalid payload.")
    return f"{label}: {msg}" if label else msg


def validate_team_submission(payload: Any) -> Union[SrmTeamSubmission, NonSrmTeamSubmission]:
    """
    Validate an untrusted request body.

    Pure function: returns the typed submission (no id/timestamps) or raises
    SchemaViolationError with the message of the first failing rule.
    """
    if not isinstance(payload, dict):
        raise SchemaViolationError("Team details must be a JSON object.")

    try:
        return _submission_adapter.validate_python(payload)
    except ValidationError as exc:
        errors = exc.errors()
        message = _error_message(errors[0]) if errors else "Invalid payload."
        raise SchemaViolationError(message) from exc


def submission_payload(
    submission: Union[SrmTeamSubmission, NonSrmTeamSubmission],
) -> Dict[str, Any]:
    """JSON-ready fields of a validated submission (None values dropped)."""
    return submission.model_dump(mode="json", exclude_none=True)
