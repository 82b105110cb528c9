"""Tests for the immutable domain values and their builders."""

import dataclasses
from datetime import datetime, timezone

import pytest

from core.domain.kinds import ResourceKind
from core.domain.models import Change, ManagedZone, Project, Quota, ResourceRecordSet
from core.domain.resource import Identity
from core.errors import ValidationError

CREATED = datetime(2014, 10, 24, 12, 30, tzinfo=timezone.utc)


def make_quota(**overrides):
    values = dict(
        managed_zones=100,
        rrsets_per_managed_zone=10000,
        rrset_additions_per_change=100,
        rrset_deletions_per_change=100,
        total_rrdata_size_per_change=10000,
        resource_records_per_rrset=100,
    )
    values.update(overrides)
    builder = Quota.builder()
    for name, value in values.items():
        getattr(builder, name)(value)
    return builder.build()


def make_zone(**overrides):
    builder = (
        ManagedZone.builder()
        .name(overrides.get("name", "example-zone"))
        .id(overrides.get("id", 42))
        .dns_name(overrides.get("dns_name", "example.com."))
        .creation_time(overrides.get("creation_time", CREATED))
        .description(overrides.get("description"))
        .name_servers(overrides.get("name_servers", ["ns1.example.net.", "ns2.example.net."]))
    )
    return builder.build()


def make_rrset(name="www.example.com.", rrdatas=("10.0.0.1",)):
    return ResourceRecordSet.builder().name(name).type("A").ttl(300).rrdatas(rrdatas).build()


class TestIdentity:
    def test_kind_is_required(self):
        with pytest.raises(ValidationError) as excinfo:
            Identity(kind=None)  # type: ignore[arg-type]
        assert excinfo.value.field == "kind"

    def test_domain_accessors_map_onto_identity(self):
        zone = make_zone()
        assert zone.kind is ResourceKind.MANAGED_ZONE
        assert zone.name == zone._string_id == "example-zone"
        assert zone.id == zone._numeric_id == 42

    def test_record_set_has_no_numeric_id(self):
        rrset = make_rrset()
        assert rrset.kind is ResourceKind.RESOURCE_RECORD_SET
        assert rrset._numeric_id is None


class TestEquality:
    def test_zones_differing_only_in_description_are_equal(self):
        # Equality covers (kind, numeric id, string id) only.
        a = make_zone(description="first")
        b = make_zone(description="second", name_servers=[])
        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_different_identity_is_not_equal(self):
        assert make_zone(id=1) != make_zone(id=2)
        assert make_zone(name="a") != make_zone(name="b")

    def test_different_types_never_equal(self):
        assert make_rrset() != make_zone()
        assert make_zone() != "example-zone"


class TestImmutability:
    def test_values_are_frozen(self):
        zone = make_zone()
        with pytest.raises(dataclasses.FrozenInstanceError):
            zone.dns_name = "other.com."  # type: ignore[misc]

    def test_builder_input_is_copied(self):
        rrdatas = ["10.0.0.1"]
        rrset = ResourceRecordSet.builder().name("a.example.com.").type("A").rrdatas(rrdatas).build()
        rrdatas.append("10.0.0.2")
        assert rrset.rrdatas == ("10.0.0.1",)

    def test_change_copies_record_sets_into_tuples(self):
        additions = [make_rrset()]
        change = Change.builder().additions(additions).build()
        additions.clear()
        assert isinstance(change.additions, tuple)
        assert len(change.additions) == 1


class TestRequiredFields:
    def test_managed_zone_missing_dns_name(self):
        with pytest.raises(ValidationError) as excinfo:
            ManagedZone.builder().name("z").build()
        assert excinfo.value.field == "dns_name"

    def test_managed_zone_missing_name(self):
        with pytest.raises(ValidationError) as excinfo:
            ManagedZone.builder().id(1).dns_name("z.com.").creation_time(CREATED).build()
        assert excinfo.value.field == "name"

    def test_managed_zone_missing_creation_time(self):
        with pytest.raises(ValidationError) as excinfo:
            ManagedZone.builder().name("z").id(1).dns_name("z.com.").build()
        assert excinfo.value.field == "creation_time"

    def test_project_requires_quota(self):
        with pytest.raises(ValidationError) as excinfo:
            Project.builder().id("p").number(1).build()
        assert excinfo.value.field == "quota"

    def test_quota_requires_every_limit(self):
        with pytest.raises(ValidationError) as excinfo:
            Quota.builder().managed_zones(1).build()
        assert excinfo.value.field == "rrsets_per_managed_zone"

    def test_quota_rejects_negative_values(self):
        with pytest.raises(ValidationError):
            make_quota(managed_zones=-1)

    def test_record_set_requires_name_and_type(self):
        with pytest.raises(ValidationError) as excinfo:
            ResourceRecordSet.builder().type("A").build()
        assert excinfo.value.field == "name"
        with pytest.raises(ValidationError) as excinfo:
            ResourceRecordSet.builder().name("a.example.com.").build()
        assert excinfo.value.field == "type"

    def test_change_status_must_be_known(self):
        with pytest.raises(ValidationError) as excinfo:
            Change.builder().status("exploded").build()
        assert excinfo.value.field == "status"


class TestCollections:
    def test_empty_change_has_empty_collections(self):
        change = Change.builder().build()
        assert change.additions == ()
        assert change.deletions == ()
        assert change.id is None

    def test_none_collections_become_empty(self):
        zone = make_zone(name_servers=None)
        assert zone.name_servers == frozenset()
        rrset = ResourceRecordSet.builder().name("a.").type("A").rrdatas(None).build()
        assert rrset.rrdatas == ()

    def test_name_servers_are_deduplicated(self):
        zone = make_zone(name_servers=["ns1.", "ns2.", "ns1."])
        assert zone.name_servers == {"ns1.", "ns2."}

    def test_rrdatas_keep_order(self):
        rrset = make_rrset(rrdatas=["b", "a", "c"])
        assert rrset.rrdatas == ("b", "a", "c")


class TestToBuilder:
    def test_round_trip_is_identical(self):
        zone = make_zone(description="desc")
        rebuilt = zone.to_builder().build()
        assert rebuilt == zone
        assert rebuilt.description == zone.description
        assert rebuilt.name_servers == zone.name_servers
        assert rebuilt.creation_time == zone.creation_time

    def test_round_trip_every_kind(self):
        quota = make_quota()
        project = Project.builder().id("p").number(7).quota(quota).build()
        change = (
            Change.builder()
            .id(3)
            .add_addition(make_rrset())
            .add_deletion(make_rrset(rrdatas=["10.0.0.9"]))
            .start_time(CREATED)
            .status("done")
            .build()
        )
        rrset = make_rrset()

        assert quota.to_builder().build() == quota
        assert project.to_builder().build() == project
        assert project.to_builder().build().quota == quota
        assert rrset.to_builder().build().rrdatas == rrset.rrdatas
        rebuilt = change.to_builder().build()
        assert rebuilt == change
        assert rebuilt.additions == change.additions
        assert rebuilt.deletions[0].rrdatas == ("10.0.0.9",)
        assert rebuilt.is_done

    def test_to_builder_does_not_mutate_source(self):
        zone = make_zone()
        zone.to_builder().add_name_server("ns9.example.net.").description("changed").build()
        assert "ns9.example.net." not in zone.name_servers
        assert zone.description is None


class TestStr:
    def test_fields_in_fixed_order(self):
        zone = make_zone(description="desc", name_servers=["b.", "a."])
        text = str(zone)
        assert text == (
            "ManagedZone{kind=dns#managedZone, id=42, name=example-zone, dnsName=example.com., "
            "description=desc, nameServers=[a., b.], creationTime=2014-10-24T12:30:00+00:00}"
        )
        assert str(make_zone(description="desc", name_servers=["a.", "b."])) == text

    def test_none_values_are_omitted(self):
        assert str(Change.builder().build()) == "Change{kind=dns#change, additions=[], deletions=[]}"

    def test_quota_str(self):
        assert str(make_quota()).startswith("Quota{managed_zones=100, rrsets_per_managed_zone=10000")
