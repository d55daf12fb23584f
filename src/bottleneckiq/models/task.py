"""Task input model for BottleneckIQ."""

from pydantic import BaseModel, ConfigDict, Field


class TaskRecord(BaseModel):
    """A single observed task: how long it waited and how long it ran."""

    model_config = ConfigDict(frozen=True)

    task_id: int = Field(..., description="Identifier, unique within a batch")
    queue_wait_time: float = Field(..., ge=0, description="Minutes spent waiting in queue")
    process_time: float = Field(..., ge=0, description="Minutes spent in the process step")

    @property
    def total_time(self) -> float:
        """Queue wait plus process time."""
        return self.queue_wait_time + self.process_time
