from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class CategoryResponse(BaseModel):
    id: str
    name: str
    description: str | None = None

    model_config = ConfigDict(from_attributes=True)


class ExerciseBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    video: str | None = Field(None, max_length=1024, description="Demo video URL")
    image: str | None = Field(None, max_length=1024, description="Preview image URL")
    category_id: str | None = Field(
        None,
        validation_alias=AliasChoices("category_id", "category"),
        description="Category the exercise belongs to",
    )


class ExerciseCreate(ExerciseBase):
    user_id: str | None = Field(None, description="Owner; None creates a global exercise")


class ExerciseCreateRequest(ExerciseBase):
    shared: bool = Field(False, description="Create a global exercise instead of a private one")


class ExerciseResponse(ExerciseBase):
    id: str
    user_id: str | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class VariantBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    video: str | None = Field(None, max_length=1024)
    image: str | None = Field(None, max_length=1024)
    category_id: str | None = Field(None, validation_alias=AliasChoices("category_id", "category"))


class VariantCreateRequest(VariantBase):
    exercise_id: str


class VariantCreate(VariantCreateRequest):
    user_id: str


class VariantUpdateRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    video: str | None = Field(None, max_length=1024)
    image: str | None = Field(None, max_length=1024)
    category_id: str | None = Field(None, validation_alias=AliasChoices("category_id", "category"))


class VariantUpdate(VariantUpdateRequest):
    variant_id: str
    user_id: str

    def changes(self) -> dict:
        """Writable fields the caller explicitly set."""
        return self.model_dump(exclude_unset=True, exclude={"variant_id", "user_id"})


class VariantResponse(VariantBase):
    id: str
    user_id: str | None = None
    exercise_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class DescriptionCreateRequest(BaseModel):
    description: str = Field(..., min_length=1)
    exercise_id: str | None = None


class DescriptionCreate(DescriptionCreateRequest):
    user_id: str


class DescriptionResponse(BaseModel):
    id: str
    description: str
    user_id: str | None = None
    exercise_id: str | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class UnifiedExerciseResponse(ExerciseResponse):
    """Exercise merged with the caller's variant and its category; never stored."""

    variant: VariantResponse | None = None
    category: CategoryResponse | None = None
    has_user: bool = Field(False, description="True when the exercise itself is private")
