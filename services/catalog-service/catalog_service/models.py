import uuid

from sqlalchemy import Column, DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import relationship

from .database import Base


def _uuid() -> str:
    return str(uuid.uuid4())


class ExerciseCategory(Base):
    __tablename__ = "exercise_categories"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(255), unique=True, index=True, nullable=False)
    description = Column(Text, nullable=True)

    def __repr__(self):
        return f"<ExerciseCategory(id={self.id}, name='{self.name}')>"


class Exercise(Base):
    """Catalog exercise; ``user_id`` is NULL for the shared catalog."""

    __tablename__ = "exercises"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(255), index=True, nullable=False)
    video = Column(String(1024), nullable=True)
    image = Column(String(1024), nullable=True)
    category_id = Column(String(36), ForeignKey("exercise_categories.id"), nullable=True)
    user_id = Column(String(255), index=True, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    category = relationship("ExerciseCategory", lazy="raise")
    variants = relationship("ExerciseVariant", back_populates="exercise", lazy="raise")

    def __repr__(self):
        return f"<Exercise(id={self.id}, name='{self.name}', user_id={self.user_id})>"


class ExerciseVariant(Base):
    # (exercise_id, user_id) is not unique at the store level, see merge.pick_variant
    __tablename__ = "exercise_variants"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(255), index=True, nullable=False)
    video = Column(String(1024), nullable=True)
    image = Column(String(1024), nullable=True)
    category_id = Column(String(36), ForeignKey("exercise_categories.id"), nullable=True)
    user_id = Column(String(255), index=True, nullable=False)
    exercise_id = Column(String(36), ForeignKey("exercises.id"), index=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    exercise = relationship("Exercise", back_populates="variants", lazy="raise")

    def __repr__(self):
        return f"<ExerciseVariant(id={self.id}, name='{self.name}', exercise_id={self.exercise_id})>"


class ExerciseDescription(Base):
    __tablename__ = "exercise_descriptions"

    id = Column(String(36), primary_key=True, default=_uuid)
    description = Column(Text, nullable=False)
    user_id = Column(String(255), index=True, nullable=False)
    exercise_id = Column(String(36), ForeignKey("exercises.id"), index=True, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<ExerciseDescription(id={self.id}, user_id={self.user_id})>"
