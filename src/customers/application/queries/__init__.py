from customers.application.queries.find_all_customers_query import (
    FindAllCustomersQuery,
    FindAllCustomersQueryHandler,
)
from customers.application.queries.find_one_customer_query import (
    FindOneCustomerQuery,
    FindOneCustomerQueryHandler,
)

__all__ = [
    "FindOneCustomerQuery",
    "FindOneCustomerQueryHandler",
    "FindAllCustomersQuery",
    "FindAllCustomersQueryHandler",
]
