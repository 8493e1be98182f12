import copy

from lifestyle_survey.main import app, get_limiter, get_store
from lifestyle_survey.services.rate_limit import SubmissionLimiter
from lifestyle_survey.services.store import StoreError

SUBMIT = "/api/surveys/submit"
STATS = "/api/surveys/stats"


class BrokenStore:
    def insert(self, record):
        raise StoreError("Could not save survey response.")

    def find_all(self):
        raise StoreError("Could not read survey responses.")


def test_submit_valid_survey(client, store, payload):
    resp = client.post(SUBMIT, json=payload)
    assert resp.status_code == 201
    assert resp.json() == {"message": "Survey submitted successfully"}
    saved = store.find_all()
    assert len(saved) == 1
    assert saved[0].email == "tlm.ledwaba@mweb.co.za"


def test_submit_invalid_survey_lists_every_field(client, store, payload):
    bad = copy.deepcopy(payload)
    bad["fullName"] = "X"
    bad["contactNumber"] = "082-123-45"
    bad["ratings"]["listenRadio"] = 7
    resp = client.post(SUBMIT, json=bad)
    assert resp.status_code == 400
    body = resp.json()
    assert body["message"] == "Validation failed"
    assert body["errors"] == [
        {"field": "fullName", "message": "Name must be between 2-50 characters"},
        {"field": "contactNumber", "message": "Contact number must contain only numbers"},
        {"field": "ratings.listenRadio", "message": "Rating must be between 1-5"},
    ]
    assert store.find_all() == []


def test_submit_rejects_non_object_body(client, store):
    resp = client.post(SUBMIT, json=["Pizza"])
    assert resp.status_code == 400
    resp = client.post(SUBMIT, content=b"{not json", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert store.find_all() == []


def test_stats_without_surveys(client):
    resp = client.get(STATS)
    assert resp.status_code == 200
    assert resp.json() == {"message": "No Surveys Available"}


def test_stats_after_submissions(client, payload):
    second = copy.deepcopy(payload)
    second.update(email="naledi@gmail.com", dateOfBirth="2000-06-16", favoriteFoods=["Pap and Wors"])
    second["ratings"] = {"eatOut": 5, "watchMovies": 2, "watchTV": 3, "listenRadio": 4}
    assert client.post(SUBMIT, json=payload).status_code == 201
    assert client.post(SUBMIT, json=second).status_code == 201

    resp = client.get(STATS)
    assert resp.status_code == 200
    assert resp.json() == {
        "totalSurveys": 2,
        "averageAge": 29.5,
        "oldest": 35,
        "youngest": 24,
        "pizzaLoversPercentage": 50.0,
        "papWorsPercentage": 50.0,
        "averageEatOutRating": 4.5,
        "averageWatchMoviesRating": 3.5,
        "averageWatchTVRating": 2.5,
        "averageListenRadioRating": 2.5,
    }


def test_submit_rate_limited(client, payload):
    limiter = SubmissionLimiter(max_hits=2, window_s=900)
    app.dependency_overrides[get_limiter] = lambda: limiter
    assert client.post(SUBMIT, json=payload).status_code == 201
    assert client.post(SUBMIT, json={}).status_code == 400
    resp = client.post(SUBMIT, json=payload)
    assert resp.status_code == 429
    assert resp.json()["detail"] == "Too many survey submissions from this IP, please try again later"
    assert int(resp.headers["Retry-After"]) > 0


def test_store_failures_surface_as_server_errors(client, payload):
    app.dependency_overrides[get_store] = lambda: BrokenStore()
    resp = client.post(SUBMIT, json=payload)
    assert resp.status_code == 500
    assert resp.json() == {"error": "Could not save survey response."}
    resp = client.get(STATS)
    assert resp.status_code == 500


def test_oversized_rating_is_a_validation_error(client, store, payload):
    payload["ratings"]["eatOut"] = "9" * 5000
    resp = client.post(SUBMIT, json=payload)
    assert resp.status_code == 400
    assert resp.json()["errors"] == [{"field": "ratings.eatOut", "message": "Rating must be between 1-5"}]
    assert store.find_all() == []
