import pytest

from phoneshop.services.customer_service import apply_transaction

from conftest import get_data, post_json


@pytest.fixture
def customer(client):
    return post_json(client, '/customers', {'name': 'Ayse', 'phone': '5551112233', 'debt': 100, 'credit': 40})


def _post(client, customer_id, tx_type, amount, description=''):
    return client.post('/customer-transactions', json={
        'customerId': customer_id,
        'type': tx_type,
        'amount': amount,
        'description': description,
    })


class TestLedgerPostings:

    @pytest.mark.parametrize('tx_type,amount,debt,credit', [
        ('debt', 50, 150, 40),
        ('credit', 25, 100, 65),
        ('payment_received', 30, 70, 40),
        ('payment_made', 10, 100, 30),
    ])
    def test_balance_delta(self, client, customer, tx_type, amount, debt, credit):
        response = _post(client, customer['id'], tx_type, amount)
        assert response.status_code == 200

        stored = get_data(client, f"/customers/{customer['id']}")
        assert stored['debt'] == debt
        assert stored['credit'] == credit

    def test_payment_received_never_below_zero(self, client, customer):
        _post(client, customer['id'], 'payment_received', 500)
        assert get_data(client, f"/customers/{customer['id']}")['debt'] == 0

    def test_payment_made_never_below_zero(self, client, customer):
        _post(client, customer['id'], 'payment_made', 500)
        assert get_data(client, f"/customers/{customer['id']}")['credit'] == 0

    def test_transaction_is_recorded(self, client, customer):
        response = _post(client, customer['id'], 'debt', 75, 'Screen protector on tab')
        tx = response.get_json()['data']

        assert tx['customerId'] == customer['id']
        assert tx['type'] == 'debt'
        assert tx['amount'] == 75
        assert tx['description'] == 'Screen protector on tab'
        assert tx['createdAt'].endswith('Z')
        assert get_data(client, '/customer-transactions') == [tx]

    def test_missing_customer_is_404_and_writes_nothing(self, client):
        response = _post(client, 'ghost', 'debt', 10)

        assert response.status_code == 404
        assert response.get_json() == {'success': False, 'error': 'Customer not found'}
        assert get_data(client, '/customer-transactions') == []

    def test_unknown_type_is_400(self, client, customer):
        response = _post(client, customer['id'], 'gift', 10)
        assert response.status_code == 400
        assert get_data(client, f"/customers/{customer['id']}")['debt'] == 100

    def test_amount_is_required(self, client, customer):
        response = client.post('/customer-transactions', json={'customerId': customer['id'], 'type': 'debt'})
        assert response.status_code == 400

    def test_filter_by_customer(self, client, customer):
        other = post_json(client, '/customers', {'name': 'Veli', 'phone': '5559998877', 'debt': 0, 'credit': 0})
        _post(client, customer['id'], 'debt', 10)
        _post(client, other['id'], 'credit', 20)

        mine = get_data(client, f"/customer-transactions?customerId={customer['id']}")
        assert [t['customerId'] for t in mine] == [customer['id']]
        assert len(get_data(client, '/customer-transactions')) == 2

    def test_deleting_customer_keeps_transactions(self, client, customer):
        _post(client, customer['id'], 'debt', 10)
        client.delete(f"/customers/{customer['id']}")

        assert len(get_data(client, '/customer-transactions')) == 1


def test_apply_transaction_treats_missing_balances_as_zero():
    updated = apply_transaction({'id': '1', 'name': 'New'}, 'debt', 20)
    assert updated == {'id': '1', 'name': 'New', 'debt': 20, 'credit': 0}


def test_apply_transaction_does_not_mutate_input():
    original = {'id': '1', 'debt': 10, 'credit': 0}
    apply_transaction(original, 'payment_received', 4)
    assert original['debt'] == 10


@pytest.mark.parametrize('amount', ['nan', 'inf', '-inf', float('inf')])
def test_non_finite_amount_is_rejected(client, customer, amount):
    response = _post(client, customer['id'], 'debt', amount)

    assert response.status_code == 400
    assert response.get_json()['error'] == 'amount must be a number'
    assert get_data(client, f"/customers/{customer['id']}")['debt'] == 100


def test_nan_literal_amount_leaves_balance_untouched(client, customer):
    body = '{"customerId": "%s", "type": "debt", "amount": NaN}' % customer['id']
    response = client.post('/customer-transactions', data=body, content_type='application/json')

    assert response.status_code == 400
    assert get_data(client, f"/customers/{customer['id']}")['debt'] == 100
    assert get_data(client, '/customer-transactions') == []


def test_ledger_posting_on_sql_backend(sql_app):
    client = sql_app.test_client()
    customer = post_json(client, '/customers', {'name': 'Ayse', 'phone': '555', 'debt': 10, 'credit': 0})

    assert _post(client, customer['id'], 'debt', 15).status_code == 200
    assert _post(client, customer['id'], 'payment_received', 40).status_code == 200
    assert get_data(client, f"/customers/{customer['id']}")['debt'] == 0
