from __future__ import annotations
from collections.abc import Iterable
from datetime import date
from decimal import Decimal, ROUND_HALF_UP

from ..schemas import FoodChoice, NO_SURVEYS, NoSurveys, StatisticsSummary, SurveyRecord
from .ages import compute_age

ONE_PLACE = Decimal("0.1")


def _mean(total: int, count: int) -> Decimal:
    return (Decimal(total) / Decimal(count)).quantize(ONE_PLACE, rounding=ROUND_HALF_UP)


def summarize(records: Iterable[SurveyRecord], today: date) -> StatisticsSummary | NoSurveys:
    """
    Reduce every stored response to one statistics summary, in a single pass.
    Returns NO_SURVEYS when there is nothing to summarize.
    """
    count = 0
    age_sum = 0
    oldest = youngest = None
    pizza = pap_wors = 0
    eat_out = movies = tv = radio = 0

    for r in records:
        count += 1
        age = compute_age(r.date_of_birth, today)
        age_sum += age
        oldest = age if oldest is None else max(oldest, age)
        youngest = age if youngest is None else min(youngest, age)

        foods = set(r.favorite_foods)
        pizza += FoodChoice.PIZZA in foods
        pap_wors += FoodChoice.PAP_AND_WORS in foods

        eat_out += r.ratings.eat_out
        movies += r.ratings.watch_movies
        tv += r.ratings.watch_tv
        radio += r.ratings.listen_radio

    if count == 0:
        return NO_SURVEYS

    return StatisticsSummary(
        total_surveys=count,
        average_age=_mean(age_sum, count),
        oldest=oldest,
        youngest=youngest,
        pizza_lovers_percentage=_mean(100 * pizza, count),
        pap_wors_percentage=_mean(100 * pap_wors, count),
        average_eat_out_rating=_mean(eat_out, count),
        average_watch_movies_rating=_mean(movies, count),
        average_watch_tv_rating=_mean(tv, count),
        average_listen_radio_rating=_mean(radio, count),
    )
