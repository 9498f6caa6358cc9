"""Schemas for training plans."""

from __future__ import annotations

from pydantic import BaseModel, Field


class PlanExerciseCreate(BaseModel):
    exercise_name: str = Field(..., min_length=1, max_length=120)
    sets: int = Field(..., ge=1)
    reps: int = Field(..., ge=1)
    rest: int | str | None = Field(
        default=None, description="Descanso em segundos ou no formato mm:ss"
    )


class TrainingPlanCreate(BaseModel):
    subject_id: int = Field(..., ge=1)
    title: str = Field(..., min_length=1, max_length=200)
    notes: str | None = None
    exercises: list[PlanExerciseCreate] = Field(..., min_length=1)


class TrainingPlanCreated(BaseModel):
    id: int


class PlanExerciseRead(BaseModel):
    id: int
    exercise_name: str
    sets: int
    reps: int
    rest: int
    rest_mmss: str
    order_index: int


class TrainingPlanRead(BaseModel):
    id: int
    title: str
    notes: str
    subject_id: int
    supervisor_id: int
    exercises: list[PlanExerciseRead]
