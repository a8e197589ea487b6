from .lifecycle_status import LifecycleStatus as LifecycleStatus
from .payment_status import PaymentStatus as PaymentStatus
