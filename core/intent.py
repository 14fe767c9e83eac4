# core/intent.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class ProjectRef(BaseModel):
    """A project identity as returned by the project lookup."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str


class AmbientContext(BaseModel):
    """
    What surrounds a voice command: who is speaking and,
    optionally, which project they currently have open.
    Immutable for the duration of one classification.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str
    project: Optional[ProjectRef] = None

    def with_project(self, project: ProjectRef) -> "AmbientContext":
        return self.model_copy(update={"project": project})


class VoiceCommand(BaseModel):
    """
    A passive container for one transcript.
    This does NOT classify.
    This does NOT persist.
    """

    model_config = ConfigDict(frozen=True)

    raw_input: str = Field(..., min_length=1)
    context: AmbientContext
