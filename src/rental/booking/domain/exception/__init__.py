from .exceptions import (
    AlreadyCancelledException as AlreadyCancelledException,
)
from .exceptions import (
    InvalidStatusTransitionException as InvalidStatusTransitionException,
)
from .exceptions import (
    InvalidWindowException as InvalidWindowException,
)
from .exceptions import (
    PaymentReferenceMismatchException as PaymentReferenceMismatchException,
)
from .exceptions import (
    SchedulingConflictException as SchedulingConflictException,
)
from .exceptions import (
    VehicleUnavailableException as VehicleUnavailableException,
)
from .exceptions import (
    WindowInPastException as WindowInPastException,
)
from .exceptions import (
    WindowTooShortException as WindowTooShortException,
)
