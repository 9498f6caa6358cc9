"""SQLAlchemy models for training plans and their exercises."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class TrainingPlanModel(Base):
    """Database representation of a training plan."""

    __tablename__ = "training_plan"

    id = Column(Integer, primary_key=True, index=True)
    subject_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    supervisor_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    notes = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)

    exercises = relationship(
        "PlanExerciseModel",
        back_populates="plan",
        order_by="PlanExerciseModel.order_index",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class PlanExerciseModel(Base):
    """Single exercise row belonging to a training plan."""

    __tablename__ = "plan_exercise"

    id = Column(Integer, primary_key=True, index=True)
    plan_id = Column(
        Integer,
        ForeignKey("training_plan.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    exercise_name = Column(String(120), nullable=False)
    sets = Column(Integer, nullable=False)
    reps = Column(Integer, nullable=False)
    rest_seconds = Column(Integer, nullable=False)
    order_index = Column(Integer, nullable=False, default=0)

    plan = relationship("TrainingPlanModel", back_populates="exercises")


__all__ = ["TrainingPlanModel", "PlanExerciseModel"]
