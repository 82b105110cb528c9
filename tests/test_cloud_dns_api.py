"""End-to-end tests of the API bindings over a mock HTTP server."""

import json
from itertools import count

import pytest

from conftest import CHANGE_PAYLOAD, PROJECT_PAYLOAD, RRSET_PAYLOAD, ZONE_PAYLOAD, json_response
from core.domain.models import Change, ResourceRecordSet
from core.domain.options import ListOptions, SortOrder
from core.errors import FetchError

_ids = count(1)


def zone(name):
    return dict(ZONE_PAYLOAD, name=name, id=str(next(_ids)))


class TestProjectApi:
    def test_get(self, make_api):
        api = make_api(lambda request: json_response(PROJECT_PAYLOAD))
        project = api.projects().get("my-project")
        assert project.id == "my-project"
        assert project.quota.rrsets_per_managed_zone == 10000

    def test_missing_project_is_none(self, make_api):
        api = make_api(lambda request: json_response({"error": {"code": 404}}, 404))
        assert api.projects().get("nope") is None


class TestManagedZoneApi:
    def test_list_follows_page_tokens(self, make_api):
        requests = []
        pages = {
            None: {"managedZones": [zone("a"), zone("b")], "nextPageToken": "t1"},
            "t1": {"managedZones": [zone("c")], "nextPageToken": "t2"},
            "t2": {"managedZones": [zone("d")]},
        }

        def handler(request):
            requests.append(request.url)
            return json_response(pages[request.url.params.get("pageToken")])

        api = make_api(handler)
        options = ListOptions().max_results(2)
        zones = list(api.managed_zones("my-project").list(options))

        assert [z.name for z in zones] == ["a", "b", "c", "d"]
        assert [u.params.get("pageToken") for u in requests] == [None, "t1", "t2"]
        assert all(u.params["maxResults"] == "2" for u in requests)
        assert all(u.path == "/dns/v1/projects/my-project/managedZones" for u in requests)

    def test_list_fetches_lazily(self, make_api):
        calls = []

        def handler(request):
            calls.append(request.url.params.get("pageToken"))
            if "pageToken" in request.url.params:
                return json_response({"managedZones": [zone("b")]})
            return json_response({"managedZones": [zone("a")], "nextPageToken": "t1"})

        it = make_api(handler).managed_zones("p").list()
        assert calls == [None]
        assert next(it).name == "a"
        assert calls == [None]
        assert next(it).name == "b"
        assert calls == [None, "t1"]

    def test_get_and_missing(self, make_api):
        def handler(request):
            if request.url.path.endswith("/example-zone"):
                return json_response(ZONE_PAYLOAD)
            return json_response({}, 404)

        zones = make_api(handler).managed_zones("my-project")
        assert zones.get("example-zone").dns_name == "example.com."
        assert zones.get("missing") is None

    def test_create_posts_name_dns_name_and_description(self, make_api):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return json_response(ZONE_PAYLOAD)

        created = make_api(handler).managed_zones("my-project").create("example-zone", "example.com.", "primary zone")
        assert created.id == 1234567890
        assert seen["method"] == "POST"
        assert seen["path"] == "/dns/v1/projects/my-project/managedZones"
        assert seen["body"] == {"name": "example-zone", "dnsName": "example.com.", "description": "primary zone"}

    def test_create_omits_absent_description(self, make_api):
        seen = {}

        def handler(request):
            seen["body"] = json.loads(request.content)
            return json_response(ZONE_PAYLOAD)

        make_api(handler).managed_zones("p").create("example-zone", "example.com.")
        assert seen["body"] == {"name": "example-zone", "dnsName": "example.com."}

    def test_delete_missing_zone_is_a_no_op(self, make_api):
        methods = []

        def handler(request):
            methods.append(request.method)
            return json_response({}, 404)

        assert make_api(handler).managed_zones("p").delete("gone") is None
        assert methods == ["DELETE"]

    def test_list_of_missing_project_is_empty(self, make_api):
        api = make_api(lambda request: json_response({}, 404))
        assert list(api.managed_zones("missing").list()) == []


class TestChangeApi:
    def test_create_in_managed_zone(self, make_api, adapters):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return json_response(CHANGE_PAYLOAD)

        addition = ResourceRecordSet.builder().name("www.example.com.").type("A").ttl(300).add_rrdata("10.0.0.2").build()
        change = make_api(handler).changes("my-project").create_in_managed_zone(
            "example-zone", Change.builder().add_addition(addition).build()
        )

        assert seen["path"] == "/dns/v1/projects/my-project/managedZones/example-zone/changes"
        assert seen["body"]["additions"][0]["name"] == "www.example.com."
        assert change.id == 7
        assert change.status == "pending"

    def test_get_in_managed_zone(self, make_api):
        def handler(request):
            assert request.url.path.endswith("/managedZones/example-zone/changes/7")
            return json_response(dict(CHANGE_PAYLOAD, status="done"))

        change = make_api(handler).changes("my-project").get_in_managed_zone("example-zone", 7)
        assert change.is_done

    def test_list_passes_options_on_every_page(self, make_api):
        seen = []

        def handler(request):
            seen.append(dict(request.url.params))
            if request.url.params.get("pageToken") == "n1":
                return json_response({"kind": "dns#changesListResponse", "changes": [dict(CHANGE_PAYLOAD, id="1")]})
            return json_response(
                {"kind": "dns#changesListResponse", "changes": [CHANGE_PAYLOAD], "nextPageToken": "n1"}
            )

        options = ListOptions().sort_order(SortOrder.ASCENDING)
        changes = make_api(handler).changes("p").list_in_managed_zone("z", options).to_list()

        assert [c.id for c in changes] == [7, 1]
        assert seen == [{"sortOrder": "ascending"}, {"sortOrder": "ascending", "pageToken": "n1"}]

    def test_list_in_missing_zone_is_empty(self, make_api):
        api = make_api(lambda request: json_response({}, 404))
        assert api.changes("p").list_in_managed_zone("missing").to_list() == []

    def test_server_error_mid_sequence_propagates(self, make_api):
        def handler(request):
            if request.url.params.get("pageToken"):
                return json_response({"error": {"message": "backend down"}}, 503)
            return json_response({"changes": [CHANGE_PAYLOAD], "nextPageToken": "n1"})

        it = make_api(handler).changes("p").list_in_managed_zone("z")
        assert next(it).id == 7
        with pytest.raises(FetchError) as excinfo:
            next(it)
        assert excinfo.value.status_code == 503


class TestResourceRecordSetApi:
    def test_filtered_listing(self, make_api):
        seen = []

        def handler(request):
            seen.append(request.url)
            return json_response({"rrsets": [RRSET_PAYLOAD]})

        options = ListOptions().type_with_name("A", "www.example.com.")
        rrsets = make_api(handler).resource_record_sets("p").list_in_managed_zone("zone-1", options).to_list()

        assert [r.rrdatas for r in rrsets] == [("10.0.0.2", "10.0.0.1")]
        assert seen[0].path == "/dns/v1/projects/p/managedZones/zone-1/rrsets"
        assert seen[0].params["type"] == "A"
        assert seen[0].params["name"] == "www.example.com."

    def test_single_page_at_marker(self, make_api):
        def handler(request):
            assert request.url.params["pageToken"] == "abc"
            return json_response({"rrsets": [], "nextPageToken": "def"})

        page = make_api(handler).resource_record_sets("p").list_at_marker_in_managed_zone("z", "abc")
        assert page.items == ()
        assert page.next_marker == "def"
