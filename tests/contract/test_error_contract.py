import json

from devkit.http.responses import result_response

from customers.application import CreateCustomerCommand, FindOneCustomerQuery


async def test_validation_failure_contract(customers):
    command = CreateCustomerCommand.from_payload({"firstName": "", "lastName": "Doe", "email": "x@y.com"}).value
    result = await customers.create(command)
    response = result_response(result)

    assert response.status_code == 400
    error = json.loads(response.body)["error"]
    assert set(error) == {"code", "message", "details", "correlation_id"}
    assert error["code"] == "validation_error"
    assert error["details"]["errors"][0]["field"] == "FirstName"


async def test_not_found_contract(customers):
    result = await customers.find_one(FindOneCustomerQuery(customer_id="6f1c1c2e-2f60-4a43-9d4a-1c1b0f3b8d7e"))
    response = result_response(result)
    assert response.status_code == 404
    assert json.loads(response.body)["error"]["code"] == "not_found"
