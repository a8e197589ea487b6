from .entity import Payment as Payment
from .exception import DuplicateTransactionException as DuplicateTransactionException
from .exception import PaymentNotFoundException as PaymentNotFoundException
from .factory import PaymentFactory as PaymentFactory
from .repository import PaymentRepository as PaymentRepository
from .value_object import PaymentId as PaymentId
from .value_object import TransactionId as TransactionId
