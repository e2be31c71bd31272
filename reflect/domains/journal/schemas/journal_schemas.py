"""Journal request/response schemas and entry form validation."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from reflect.domains.journal.moods import get_mood

TITLE_MAX = 255
COLLECTION_NAME_MAX = 100


def _required_text(value: Optional[str], message: str) -> str:
    if value is None or not str(value).strip():
        raise ValueError(message)
    return str(value)


def _optional_id(value):
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return value


class JournalEntryForm(BaseModel):
    """Fields the authoring form validates before anything is dispatched."""

    # validate_default so a missing field reports the same message as an empty one
    title: Optional[str] = Field(default=None, validate_default=True)
    content: Optional[str] = Field(default=None, validate_default=True)
    mood: Optional[str] = Field(default=None, validate_default=True)
    collection_id: Optional[str] = None

    @field_validator("title", mode="before")
    @classmethod
    def title_required(cls, v):
        v = _required_text(v, "Title is required")
        if len(v.strip()) > TITLE_MAX:
            raise ValueError(f"Title must be at most {TITLE_MAX} characters")
        return v.strip()

    @field_validator("content", mode="before")
    @classmethod
    def content_required(cls, v):
        # Rich-text markup is stored as submitted.
        return _required_text(v, "Content is required")

    @field_validator("mood", mode="before")
    @classmethod
    def mood_in_catalog(cls, v):
        _required_text(v, "Mood is required")
        if get_mood(v) is None:
            raise ValueError("Invalid mood")
        return v

    @field_validator("collection_id", mode="before")
    @classmethod
    def blank_collection_is_none(cls, v):
        v = _optional_id(v)
        return None if v is None else str(v)


class _MoodPayload(BaseModel):
    mood_score: Optional[int] = None
    mood_image_query: Optional[str] = Field(default=None, max_length=255)

    def _check_mood_metadata(self, mood_id: Optional[str]):
        mood = get_mood(mood_id)
        if mood is None:
            return self
        if self.mood_score is not None and self.mood_score != mood.score:
            raise ValueError("mood_score does not match mood")
        if self.mood_image_query is not None and self.mood_image_query != mood.image_query:
            raise ValueError("mood_image_query does not match mood")
        return self


class JournalEntryCreate(_MoodPayload):
    title: str = Field(min_length=1, max_length=TITLE_MAX)
    content: str = Field(min_length=1)
    mood: str
    collection_id: Optional[int] = None

    @field_validator("title", "content")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("mood")
    @classmethod
    def mood_in_catalog(cls, v: str) -> str:
        if get_mood(v) is None:
            raise ValueError("invalid mood")
        return v

    @field_validator("collection_id", mode="before")
    @classmethod
    def blank_collection_is_none(cls, v):
        return _optional_id(v)

    @model_validator(mode="after")
    def mood_metadata_matches(self):
        return self._check_mood_metadata(self.mood)


class JournalEntryUpdate(_MoodPayload):
    title: Optional[str] = Field(default=None, min_length=1, max_length=TITLE_MAX)
    content: Optional[str] = Field(default=None, min_length=1)
    mood: Optional[str] = None
    collection_id: Optional[int] = None

    @field_validator("title", "content")
    @classmethod
    def not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("mood")
    @classmethod
    def mood_in_catalog(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and get_mood(v) is None:
            raise ValueError("invalid mood")
        return v

    @field_validator("collection_id", mode="before")
    @classmethod
    def blank_collection_is_none(cls, v):
        return _optional_id(v)

    @model_validator(mode="after")
    def mood_metadata_matches(self):
        return self._check_mood_metadata(self.mood)


class JournalEntryListFilter(BaseModel):
    collection_id: Optional[int] = None
    unorganized: bool = False
    mood: Optional[str] = None
    search_text: Optional[str] = None
    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=20, ge=1, le=100)


class JournalEntryResponse(BaseModel):
    id: int
    title: str
    content: str
    mood: str
    mood_score: int
    mood_image_query: Optional[str]
    collection_id: Optional[int]
    created_at: str
    updated_at: str


class CollectionCreate(BaseModel):
    name: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("name", mode="before")
    @classmethod
    def name_required(cls, v):
        v = _required_text(v, "Name is required").strip()
        if len(v) > COLLECTION_NAME_MAX:
            raise ValueError(f"Name must be at most {COLLECTION_NAME_MAX} characters")
        return v


class CollectionResponse(BaseModel):
    id: int
    name: str
    created_at: str


class DraftSave(BaseModel):
    title: str = Field(default="", max_length=TITLE_MAX)
    content: str = ""
    mood: str = ""

    @field_validator("title", "content", "mood", mode="before")
    @classmethod
    def none_is_empty(cls, v):
        return "" if v is None else v

    @field_validator("mood")
    @classmethod
    def mood_blank_or_in_catalog(cls, v: str) -> str:
        if v and get_mood(v) is None:
            raise ValueError("invalid mood")
        return v


class DraftResponse(BaseModel):
    title: str
    content: str
    mood: str
    updated_at: Optional[str]


class MoodResponse(BaseModel):
    id: str
    label: str
    emoji: str
    score: int
    image_query: str
    prompt: str

