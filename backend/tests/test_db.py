import threading

from sqlalchemy import inspect

from inventory_api.db import Database


def test_engine_is_created_lazily_once(tmp_path):
    db = Database(f"sqlite:///{tmp_path / 'lazy.db'}")
    assert db._engine is None

    engines = []
    barrier = threading.Barrier(8)

    def grab():
        barrier.wait()
        engines.append(db.engine)

    threads = [threading.Thread(target=grab) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(engines) == 8
    assert all(e is engines[0] for e in engines)
    db.dispose()


def test_init_schema_and_dispose(tmp_path):
    db = Database(f"sqlite:///{tmp_path / 'schema.db'}")
    db.init_schema()
    assert "products" in inspect(db.engine).get_table_names()
    assert db.ping() is True

    db.dispose()
    assert db._engine is None
    # reconnects on next use
    assert db.ping() is True
    db.dispose()
