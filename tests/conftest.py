import json

import pytest

import teamsnap

API_URL = "http://api.test"


def collection(**parts):
    """a Collection+JSON document with the given parts"""
    return {"collection": {"version": "3.0.0", **parts}}


def json_response(document, status_code=200):
    return teamsnap.Response(
        status_code,
        json.dumps(document).encode(),
        headers={"Content-Type": "application/json; charset=utf-8"},
    )


def error_response(message, status_code=422):
    return json_response(
        collection(error={"message": message}), status_code=status_code
    )


def descriptor(rel, href, *params):
    return {
        "rel": rel,
        "href": href,
        "data": [{"name": name, "value": None} for name in params],
    }


def item(href, links=(), **data):
    datatypes = data.pop("datatypes", {})
    return {
        "href": href,
        "data": [
            dict({"name": name, "value": value},
                 **({"type": datatypes[name]} if name in datatypes else {}))
            for name, value in data.items()
        ],
        "links": [{"rel": rel, "href": href} for rel, href in links],
    }


def team_item(id):
    return item(
        "{}/teams/{}".format(API_URL, id),
        links=[
            ("members", "{}/members/search?team_id={}".format(API_URL, id)),
            ("self", "{}/teams/{}".format(API_URL, id)),
        ],
        id=id,
        type="team",
        name="Team {}".format(id),
        created_at="2015-01-10T12:00:00Z",
        datatypes={"created_at": "DateTime"},
    )


def member_item(id, team_id=1):
    return item(
        "{}/members/{}".format(API_URL, id),
        links=[
            ("team", "{}/teams/search?id={}".format(API_URL, team_id)),
            ("assignments",
             "{}/assignments/search?member_id={}".format(API_URL, id)),
        ],
        id=id,
        type="member",
        first_name="Player {}".format(id),
        team_id=team_id,
        is_manager=id == 1,
    )


ROOT = collection(
    href=API_URL + "/",
    links=[
        {"rel": "teams", "href": API_URL + "/teams"},
        {"rel": "members", "href": API_URL + "/members"},
        {"rel": "assignments", "href": API_URL + "/assignments"},
        {"rel": "me", "href": API_URL + "/me"},
        {"rel": "root", "href": API_URL + "/"},
        {"rel": "self", "href": API_URL + "/"},
    ],
    queries=[
        descriptor("recent_members", API_URL + "/members/recent", "team_id"),
        descriptor("me", API_URL + "/me"),
    ],
)

TEAMS = collection(
    href=API_URL + "/teams",
    queries=[
        descriptor("search", API_URL + "/teams/search",
                   "id", "team_id", "user_id"),
    ],
)

MEMBERS = collection(
    href=API_URL + "/members",
    queries=[
        descriptor("search", API_URL + "/members/search",
                   "id", "team_id", "user_id"),
    ],
    commands=[
        descriptor("disable_member", API_URL + "/members/disable_member",
                   "member_id"),
    ],
)

ASSIGNMENTS = collection(
    href=API_URL + "/assignments",
    queries=[
        descriptor("search", API_URL + "/assignments/search",
                   "id", "member_id"),
    ],
)


def search_teams(request):
    team_id = request.params.get("id") or request.params.get("team_id")
    items = [team_item(1)] if team_id == "1" else []
    return json_response(collection(items=items))


def search_members(request):
    params = request.params
    if params.get("team_id") == "1":
        ids = range(1, 11)
    elif params.get("id", "").isdigit() and 1 <= int(params["id"]) <= 10:
        ids = [int(params["id"])]
    else:
        ids = []
    return json_response(collection(items=[member_item(i) for i in ids]))


def disable_member(request):
    body = json.loads(request.content.decode())
    if "member_id" not in body:
        return error_response("You must provide the member_id.")
    return json_response(collection(items=[member_item(body["member_id"])]))


def search_assignments(request):
    return json_response(collection(items=[]))


def recent_members(request):
    return json_response(collection(items=[member_item(3)]))


class FakeApi(object):
    """an HTTP client serving canned documents, recording requests.

    Routes map (method, url) to a response, an exception to raise,
    or a callable taking the request.
    """

    def __init__(self, routes=None):
        self.routes = {
            ("GET", API_URL + "/"): json_response(ROOT),
            ("GET", API_URL + "/teams"): json_response(TEAMS),
            ("GET", API_URL + "/members"): json_response(MEMBERS),
            ("GET", API_URL + "/assignments"): json_response(ASSIGNMENTS),
            ("GET", API_URL + "/teams/search"): search_teams,
            ("GET", API_URL + "/members/search"): search_members,
            ("GET", API_URL + "/members/recent"): recent_members,
            ("POST", API_URL + "/members/disable_member"): disable_member,
            ("GET", API_URL + "/assignments/search"): search_assignments,
        }
        self.routes.update(routes or {})
        self.requests = []
        self.timeouts = []

    def send(self, request, timeout=None):
        self.requests.append(request)
        self.timeouts.append(timeout)
        try:
            handler = self.routes[request.method, request.url]
        except KeyError:
            return teamsnap.Response(
                404, b"not found", headers={"Content-Type": "text/plain"}
            )
        if isinstance(handler, Exception):
            raise handler
        return handler(request) if callable(handler) else handler

    def urls(self, method="GET"):
        return [r.url for r in self.requests if r.method == method]


teamsnap.send.register(FakeApi, FakeApi.send)


@pytest.fixture
def api():
    return FakeApi()


@pytest.fixture
def client(api):
    return teamsnap.Client(
        url=API_URL, token="my-token", backup_cache=False, http_client=api
    )
