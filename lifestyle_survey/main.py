from __future__ import annotations
import logging
from datetime import date
from fastapi import FastAPI, Depends, Request, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from .config import SUBMIT_RATE_LIMIT, SUBMIT_RATE_WINDOW_S
from .db import Base, engine, get_db
from . import models  # noqa: F401  (registers the tables on Base)
from .schemas import NoSurveys, SubmitOut, ValidationFailedOut
from .services.aggregator import summarize
from .services.rate_limit import SubmissionLimiter
from .services.store import SqlSurveyStore, StoreError, SurveyStore
from .services.validator import validate

log = logging.getLogger("survey_api")

RATE_LIMIT_MESSAGE = "Too many survey submissions from this IP, please try again later"

app = FastAPI(title="Lifestyle Survey")


Base.metadata.create_all(bind=engine)

submit_limiter = SubmissionLimiter(SUBMIT_RATE_LIMIT, SUBMIT_RATE_WINDOW_S)


def get_store(db: Session = Depends(get_db)) -> SurveyStore:
    return SqlSurveyStore(db)

def get_today() -> date:
    return date.today()

def get_limiter() -> SubmissionLimiter:
    return submit_limiter

def enforce_submit_limit(request: Request, limiter: SubmissionLimiter = Depends(get_limiter)) -> None:
    client = request.client.host if request.client else "unknown"
    retry_after = limiter.hit(client)
    if retry_after:
        log.warning("submission rate limit hit for %s (retry in %ss)", client, retry_after)
        raise HTTPException(status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail=RATE_LIMIT_MESSAGE,
                            headers={"Retry-After": str(retry_after)})


@app.post("/api/surveys/submit", status_code=status.HTTP_201_CREATED,
          dependencies=[Depends(enforce_submit_limit)])
async def submit_survey(request: Request,
                        store: SurveyStore = Depends(get_store),
                        today: date = Depends(get_today)):
    """
    Body:
      { "fullName": str, "email": str, "contactNumber": "0821234567",
        "dateOfBirth": "YYYY-MM-DD",
        "favoriteFoods": ["Pizza" | "Pap and Wors" | "Other" | "Pasta", ...],
        "ratings": {"eatOut": 1..5, "watchMovies": 1..5, "watchTV": 1..5, "listenRadio": 1..5} }
    """
    try:
        body = await request.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        return JSONResponse({"message": "Request body must be a JSON object"}, status_code=400)

    result = validate(body, today)
    if not result.ok:
        log.info("survey rejected: %s", ", ".join(e.field for e in result.errors))
        return JSONResponse(ValidationFailedOut(errors=result.errors).model_dump(), status_code=400)

    try:
        rid = store.insert(result.record)
    except StoreError as e:
        return JSONResponse({"error": str(e)}, status_code=500)

    log.info("survey %s stored", rid)
    return SubmitOut().model_dump()


@app.get("/api/surveys/stats")
def survey_stats(store: SurveyStore = Depends(get_store), today: date = Depends(get_today)):
    try:
        records = store.find_all()
    except StoreError as e:
        return JSONResponse({"error": str(e)}, status_code=500)

    result = summarize(records, today)
    if isinstance(result, NoSurveys):
        return result.model_dump()
    return result.model_dump(mode="json", by_alias=True)
