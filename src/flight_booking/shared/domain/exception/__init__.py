from .exceptions import (
    BusinessRuleViolationException as BusinessRuleViolationException,
)
from .exceptions import (
    CompensationFailedException as CompensationFailedException,
)
from .exceptions import ConflictException as ConflictException
from .exceptions import DomainException as DomainException
from .exceptions import DuplicateResourceException as DuplicateResourceException
from .exceptions import (
    InsufficientCapacityException as InsufficientCapacityException,
)
from .exceptions import InvalidStateException as InvalidStateException
from .exceptions import InvalidTransitionException as InvalidTransitionException
from .exceptions import OptimisticLockException as OptimisticLockException
from .exceptions import ResourceNotFoundException as ResourceNotFoundException
from .exceptions import ValidationException as ValidationException
