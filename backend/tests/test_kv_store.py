import pytest
from sqlalchemy.exc import OperationalError

from phoneshop.services.kv_store import KVBackendError, kv, select_backend

from conftest import make_app


@pytest.fixture(params=['memory', 'sql'])
def any_app(request):
    app = make_app(KV_BACKEND=request.param)
    with app.app_context():
        yield app


class TestKeyValueSemantics:
    """Both backends must behave identically."""

    def test_get_missing_key_returns_none(self, any_app):
        assert kv.get('product:nope') is None

    def test_set_then_get(self, any_app):
        kv.set('product:1', {'id': '1', 'name': 'Case', 'stock': 50})
        assert kv.get('product:1') == {'id': '1', 'name': 'Case', 'stock': 50}

    def test_set_overwrites(self, any_app):
        kv.set('product:1', {'id': '1', 'name': 'Case'})
        kv.set('product:1', {'id': '1', 'name': 'Cover'})
        assert kv.get('product:1') == {'id': '1', 'name': 'Cover'}

    def test_delete_absent_key_is_noop(self, any_app):
        kv.delete('product:missing')
        assert kv.get('product:missing') is None

    def test_delete_removes_value(self, any_app):
        kv.set('sale:1', {'id': '1'})
        kv.delete('sale:1')
        assert kv.get('sale:1') is None

    def test_scan_matches_prefix_only(self, any_app):
        kv.set('product:1', {'id': '1'})
        kv.set('product:2', {'id': '2'})
        kv.set('phonesale:1', {'id': 'p1'})
        kv.set('productx', {'id': 'x'})

        values = kv.scan('product:')
        assert sorted(v['id'] for v in values) == ['1', '2']

    def test_scan_treats_wildcards_literally(self, any_app):
        kv.set('a_b:1', {'id': 'underscore'})
        kv.set('axb:1', {'id': 'letter'})
        kv.set('a%b:1', {'id': 'percent'})

        assert [v['id'] for v in kv.scan('a_b:')] == ['underscore']
        assert [v['id'] for v in kv.scan('a%b:')] == ['percent']

    def test_returned_values_are_copies(self, any_app):
        kv.set('customer:1', {'id': '1', 'debt': 10})
        value = kv.get('customer:1')
        value['debt'] = 999
        assert kv.get('customer:1')['debt'] == 10

    def test_clear(self, any_app):
        kv.set('expense:1', {'id': '1'})
        kv.set('category:1', {'id': '1'})
        kv.clear()
        assert kv.scan('') == []


class TestBackendSelection:

    def test_memory_mode_never_touches_sql(self, app):
        assert select_backend('memory').name == 'memory'

    def test_unknown_mode_is_rejected(self, app):
        with pytest.raises(KVBackendError):
            select_backend('redis')

    def test_auto_mode_uses_sql_when_available(self):
        app = make_app(KV_BACKEND='auto')
        with app.app_context():
            assert app.extensions['kv_store'].name == 'sql'

    def test_auto_mode_falls_back_to_memory(self, tmp_path):
        unreachable = tmp_path / 'missing-dir' / 'nested' / 'shop.sqlite3'
        app = make_app(KV_BACKEND='auto', SQLALCHEMY_DATABASE_URI=f'sqlite:///{unreachable}')

        with app.app_context():
            assert app.extensions['kv_store'].name == 'memory'

        client = app.test_client()
        created = client.post('/categories', json={'name': 'Cables'}).get_json()['data']
        listed = client.get('/categories').get_json()['data']
        assert listed == [created]

    def test_sql_mode_surfaces_probe_failure(self, tmp_path):
        unreachable = tmp_path / 'missing-dir' / 'nested' / 'shop.sqlite3'
        with pytest.raises(OperationalError):
            make_app(KV_BACKEND='sql', SQLALCHEMY_DATABASE_URI=f'sqlite:///{unreachable}')


def test_sql_backend_persists_rows(sql_app):
    from phoneshop.models import KVEntry
    from phoneshop.extensions import db

    kv.set('repair:7', {'id': '7', 'status': 'in_progress'})
    entry = db.session.get(KVEntry, 'repair:7')
    assert entry.value == {'id': '7', 'status': 'in_progress'}
    assert entry.updated_at is not None
