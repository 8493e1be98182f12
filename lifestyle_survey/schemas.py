from __future__ import annotations
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Annotated
from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

# fixed one-decimal values travel as JSON numbers, not strings
OneDecimal = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class FoodChoice(str, Enum):
    PIZZA = "Pizza"
    PAP_AND_WORS = "Pap and Wors"
    OTHER = "Other"
    PASTA = "Pasta"


class Ratings(BaseModel):
    model_config = ConfigDict(frozen=True)

    eat_out: int = Field(ge=1, le=5)
    watch_movies: int = Field(ge=1, le=5)
    watch_tv: int = Field(ge=1, le=5)
    listen_radio: int = Field(ge=1, le=5)


class SurveyRecord(BaseModel):
    """A normalized survey response, ready for storage."""
    model_config = ConfigDict(frozen=True)

    full_name: str
    email: str
    contact_number: str
    date_of_birth: date
    favorite_foods: tuple[FoodChoice, ...]
    ratings: Ratings


class ErrorCode(str, Enum):
    REQUIRED_FIELD = "RequiredField"
    LENGTH_OUT_OF_RANGE = "LengthOutOfRange"
    LENGTH_MISMATCH = "LengthMismatch"
    NON_NUMERIC = "NonNumeric"
    INVALID_FORMAT = "InvalidFormat"
    OUT_OF_RANGE = "OutOfRange"
    INVALID_VALUE = "InvalidValue"
    EMPTY_COLLECTION = "EmptyCollection"


class FieldError(BaseModel):
    model_config = ConfigDict(frozen=True)

    field: str
    message: str
    code: ErrorCode = Field(exclude=True)


class ValidationFailedOut(BaseModel):
    message: str = "Validation failed"
    errors: list[FieldError]


class SubmitOut(BaseModel):
    message: str = "Survey submitted successfully"


class StatisticsSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_surveys: int = Field(serialization_alias="totalSurveys")
    average_age: OneDecimal = Field(serialization_alias="averageAge")
    oldest: int
    youngest: int
    pizza_lovers_percentage: OneDecimal = Field(serialization_alias="pizzaLoversPercentage")
    pap_wors_percentage: OneDecimal = Field(serialization_alias="papWorsPercentage")
    average_eat_out_rating: OneDecimal = Field(serialization_alias="averageEatOutRating")
    average_watch_movies_rating: OneDecimal = Field(serialization_alias="averageWatchMoviesRating")
    average_watch_tv_rating: OneDecimal = Field(serialization_alias="averageWatchTVRating")
    average_listen_radio_rating: OneDecimal = Field(serialization_alias="averageListenRadioRating")


class NoSurveys(BaseModel):
    """Returned by the aggregator when the store holds no responses."""
    model_config = ConfigDict(frozen=True)

    message: str = "No Surveys Available"


NO_SURVEYS = NoSurveys()


class ValidationResult(BaseModel):
    """Either an accepted `record` or the ordered list of `errors`, never both."""
    model_config = ConfigDict(frozen=True)

    record: SurveyRecord | None = None
    errors: list[FieldError] = []

    @property
    def ok(self) -> bool:
        return self.record is not None
