from .errors import SternBrocotError, DivideByZeroError, InvalidBoundError, NonFiniteInputError, RationalOverflowError
from .utils import DEFAULT_DTYPE, integer_dtype, size_in_bits, integer_bounds, check_range, checked_mul, checked_add, check_bound
from .utils_math import continued_fraction, real_continued_fraction
from .rational import ExactRational
from .approximate import Approximator, ContinuedFractionApproximator, approximate
from .farey import farey
