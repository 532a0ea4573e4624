import pytest

from domain.value_objects import Address
from exceptions import StorageError, ValidationError
from models import Member
from repositories.member_repository import MemberRepository


@pytest.fixture
def member_repo(db_session):
    return MemberRepository(db_session)


def test_save_assigns_id_and_find_one_returns_member(member_repo, db_session):
    member = Member(name="Mona", address=Address("Seoul", "Dongjak", "12345"))

    member_repo.save(member)
    db_session.commit()
    member_id = member.id
    db_session.expunge_all()

    found = member_repo.find_one(member_id)
    assert found is not None
    assert found.name == "Mona"
    assert found.address == Address("Seoul", "Dongjak", "12345")


def test_find_one_returns_none_for_missing_id(member_repo):
    assert member_repo.find_one(12345) is None


def test_find_all_returns_every_member_in_id_order(member_repo, db_session):
    for name in ("A", "B", "C"):
        member_repo.save(Member(name=name))
    db_session.commit()

    assert [m.name for m in member_repo.find_all()] == ["A", "B", "C"]
    assert member_repo.count() == 3


def test_find_by_name_is_exact_and_allows_duplicates(member_repo, db_session):
    first = member_repo.save(Member(name="Kim"))
    second = member_repo.save(Member(name="Kim"))
    member_repo.save(Member(name="Kimberly"))
    db_session.commit()

    found = member_repo.find_by_name("Kim")

    assert [m.id for m in found] == [first.id, second.id]
    assert member_repo.find_by_name("Nobody") == []


def test_save_constraint_violation_raises_storage_error(member_repo, db_session):
    with pytest.raises(StorageError) as exc_info:
        member_repo.save(Member(name=None))

    assert exc_info.value.details == {"operation": "save"}
    db_session.rollback()
    assert member_repo.find_all() == []


def test_filter_by_matches_exact_values(member_repo, db_session):
    member_repo.save(Member(name="Lee"))
    member_repo.save(Member(name="Leeroy"))
    db_session.commit()

    assert [m.name for m in member_repo.filter_by(name="Lee")] == ["Lee"]
    assert member_repo.exists(member_repo.find_by_name("Lee")[0].id)


def test_filter_by_rejects_unknown_attributes(member_repo, db_session):
    member_repo.save(Member(name="Lee"))
    db_session.commit()

    with pytest.raises(ValidationError) as exc_info:
        member_repo.filter_by(name="Lee", nickname="x")

    assert exc_info.value.details == {"invalid_fields": {"nickname": "x"}}
