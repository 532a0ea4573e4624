import logging

import pytest
from sqlalchemy import create_engine, inspect
from sqlalchemy.orm import sessionmaker

import main
from config import settings
from database import unit_of_work
from exceptions import StorageError
from init_db import REQUIRED_TABLES, check_schema, init_database, seed_sample_data
from models import Member
from repositories.order_query_repository import OrderQueryRepository
from utils.error_handlers import translate_storage_errors
from utils.logging_utils import configure_logging


def test_database_url_from_environment(monkeypatch):
    monkeypatch.setenv("STOREFRONT_DATABASE_URL", "postgresql://shop@db/shop")

    assert settings.get_database_url() == "postgresql://shop@db/shop"


def test_database_url_defaults_to_sqlite_file(monkeypatch, tmp_path):
    monkeypatch.delenv("STOREFRONT_DATABASE_URL", raising=False)
    monkeypatch.setattr(settings, "DATA_DIR", tmp_path / "data")

    assert settings.get_database_url() == f"sqlite:///{tmp_path / 'data' / 'storefront.db'}"
    assert (tmp_path / "data").is_dir()


def test_log_level_falls_back_to_info(monkeypatch):
    monkeypatch.setenv("STOREFRONT_LOG_LEVEL", "debug")
    assert settings.get_log_level() == logging.DEBUG

    monkeypatch.setenv("STOREFRONT_LOG_LEVEL", "chatty")
    assert settings.get_log_level() == logging.INFO


def test_configure_logging_writes_to_rotating_file(tmp_path):
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    try:
        log_file = configure_logging(tmp_path, logging.INFO)
        logging.getLogger("storefront.test").info("hello")
        for handler in root.handlers:
            handler.flush()

        assert log_file == tmp_path / "storefront.log"
        assert "storefront.test - INFO - hello" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in root.handlers[len(before):]:
            handler.close()
        root.handlers[:] = before
        root.setLevel(level)


def test_configure_logging_twice_adds_handlers_once(tmp_path):
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    try:
        configure_logging(tmp_path, logging.INFO)
        configured = list(root.handlers)
        log_file = configure_logging(tmp_path, logging.INFO)
        logging.getLogger("storefront.test").info("once")
        for handler in root.handlers:
            handler.flush()

        assert root.handlers == configured
        assert log_file.read_text(encoding="utf-8").count("storefront.test - INFO - once") == 1
    finally:
        for handler in root.handlers[len(before):]:
            handler.close()
        root.handlers[:] = before
        root.setLevel(level)


def test_unit_of_work_commits_on_success(db_session):
    with unit_of_work(db_session):
        db_session.add(Member(name="Kept"))

    db_session.expunge_all()
    assert db_session.query(Member).count() == 1


def test_unit_of_work_rolls_back_on_error(db_session):
    with pytest.raises(RuntimeError):
        with unit_of_work(db_session):
            db_session.add(Member(name="Dropped"))
            db_session.flush()
            raise RuntimeError("boom")

    assert db_session.query(Member).count() == 0


def test_unit_of_work_wraps_commit_failures(db_session):
    with pytest.raises(StorageError) as exc_info:
        with unit_of_work(db_session):
            db_session.add(Member(name=None))

    assert exc_info.value.details == {"operation": "commit"}
    assert db_session.query(Member).count() == 0


def test_translate_storage_errors_keeps_other_exceptions():
    @translate_storage_errors("noop")
    def fail():
        raise KeyError("x")

    with pytest.raises(KeyError):
        fail()


def test_init_database_creates_missing_tables(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'fresh.db'}")

    assert check_schema(engine) == {"valid": False, "missing_tables": list(REQUIRED_TABLES)}
    assert init_database(engine) == list(REQUIRED_TABLES)
    assert init_database(engine) == []
    assert set(REQUIRED_TABLES) <= set(inspect(engine).get_table_names())
    assert check_schema(engine)["valid"]
    engine.dispose()


def test_seed_sample_data_places_four_orders_once(db_session):
    order_ids = seed_sample_data(db_session)

    assert len(order_ids) == 4
    assert seed_sample_data(db_session) == []

    orders = OrderQueryRepository(db_session).find_orders_query_dtos_optimize()
    assert [order.name for order in orders] == ["userA", "userA", "userB", "userB"]
    assert [len(order.order_items) for order in orders] == [1, 1, 1, 1]


def test_main_report_prints_orders(monkeypatch, engine, capsys):
    Session = sessionmaker(bind=engine)
    with Session() as db:
        seed_sample_data(db)

    monkeypatch.setattr(main, "SessionLocal", Session)
    monkeypatch.setattr(main, "configure_logging", lambda: None)
    monkeypatch.setattr(main, "init_database", lambda: [])
    monkeypatch.setattr(main, "check_schema", lambda: {"valid": True, "missing_tables": []})

    assert main.main(["report"]) == 0
    out = capsys.readouterr().out
    assert "userA ORDERED" in out
    assert "JPA2 BOOK: 2 x 20000" in out

    assert main.main(["report", "--naive", "--json"]) == 0
    assert '"item_name": "SPRING2 BOOK"' in capsys.readouterr().out


def test_dependency_factories_share_the_session(db_session):
    import dependencies

    factories = [
        dependencies.get_member_repository,
        dependencies.get_item_repository,
        dependencies.get_order_repository,
        dependencies.get_order_query_repository,
        dependencies.get_member_service,
        dependencies.get_item_service,
        dependencies.get_order_service,
    ]

    assert all(factory(db_session).db is db_session for factory in factories)


def test_logging_context_is_attached_to_operation_logs(member_service, caplog):
    from utils.logging_utils import clear_logging_context, set_logging_context

    caplog.set_level(logging.INFO, logger="services.member_service")
    set_logging_context(request_id="req-1")
    try:
        member_service.join(Member(name="Traced"))
    finally:
        clear_logging_context()
    member_service.join(Member(name="Untraced"))

    completed = [r for r in caplog.records if r.getMessage() == "Completed join_member"]
    assert completed[0].request_id == "req-1"
    assert not hasattr(completed[1], "request_id")
