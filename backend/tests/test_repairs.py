from conftest import get_data, post_json


REPAIR = {
    'customerName': 'Ali',
    'customerPhone': '5550001122',
    'deviceInfo': 'iPhone 12',
    'imei': '351234',
    'problemDescription': 'Broken screen',
    'repairCost': 1500,
    'partsCost': 900,
    'status': 'in_progress',
    'createdAt': '2026-03-10T09:00:00.000Z',
}


class TestRepairProfit:

    def test_profit_computed_on_create(self, client):
        repair = post_json(client, '/repairs', {**REPAIR, 'profit': 1})
        assert repair['profit'] == 600

    def test_profit_recomputed_on_edit(self, client):
        repair = post_json(client, '/repairs', REPAIR)
        response = client.put(f"/repairs/{repair['id']}", json={'partsCost': 1000})

        assert response.status_code == 200
        updated = response.get_json()['data']
        assert updated['profit'] == 500
        assert updated['deviceInfo'] == 'iPhone 12'

    def test_edit_missing_repair_is_404(self, client):
        response = client.put('/repairs/missing', json={'repairCost': 10})
        assert response.status_code == 404
        assert response.get_json() == {'success': False, 'error': 'Repair not found'}


class TestRepairStatus:

    def test_delivered_sets_delivered_at(self, client):
        repair = post_json(client, '/repairs', REPAIR)
        response = client.put(f"/repairs/{repair['id']}/status", json={'status': 'delivered'})

        assert response.status_code == 200
        updated = response.get_json()['data']
        assert updated['status'] == 'delivered'
        assert updated['deliveredAt'].endswith('Z')
        assert get_data(client, f"/repairs/{repair['id']}")['status'] == 'delivered'

    def test_other_status_keeps_delivered_at(self, client):
        repair = post_json(client, '/repairs', {**REPAIR, 'deliveredAt': '2026-03-11T12:00:00.000Z'})
        response = client.put(f"/repairs/{repair['id']}/status", json={'status': 'completed'})

        updated = response.get_json()['data']
        assert updated['status'] == 'completed'
        assert updated['deliveredAt'] == '2026-03-11T12:00:00.000Z'

    def test_missing_repair_is_404(self, client):
        response = client.put('/repairs/missing/status', json={'status': 'completed'})
        assert response.status_code == 404

    def test_unknown_status_is_400(self, client):
        repair = post_json(client, '/repairs', REPAIR)
        response = client.put(f"/repairs/{repair['id']}/status", json={'status': 'lost'})

        assert response.status_code == 400
        assert get_data(client, f"/repairs/{repair['id']}")['status'] == 'in_progress'

    def test_delete_repair(self, client):
        repair = post_json(client, '/repairs', REPAIR)
        assert client.delete(f"/repairs/{repair['id']}").status_code == 200
        assert get_data(client, '/repairs') == []
