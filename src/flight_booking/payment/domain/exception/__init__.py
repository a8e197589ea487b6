from .exceptions import DuplicateTransactionException as DuplicateTransactionException
from .exceptions import PaymentNotFoundException as PaymentNotFoundException
