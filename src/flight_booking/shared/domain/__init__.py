from .entity import AggregateRoot as AggregateRoot
from .entity import Entity as Entity
from .enum import LifecycleStatus as LifecycleStatus
from .enum import PaymentStatus as PaymentStatus
from .exception import (
    BusinessRuleViolationException as BusinessRuleViolationException,
)
from .exception import (
    CompensationFailedException as CompensationFailedException,
)
from .exception import ConflictException as ConflictException
from .exception import DomainException as DomainException
from .exception import (
    DuplicateResourceException as DuplicateResourceException,
)
from .exception import (
    InsufficientCapacityException as InsufficientCapacityException,
)
from .exception import InvalidStateException as InvalidStateException
from .exception import (
    InvalidTransitionException as InvalidTransitionException,
)
from .exception import OptimisticLockException as OptimisticLockException
from .exception import (
    ResourceNotFoundException as ResourceNotFoundException,
)
from .exception import ValidationException as ValidationException
from .repository import Repository as Repository
from .value_object import Currency as Currency
from .value_object import IsoDateTime as IsoDateTime
from .value_object import Money as Money
