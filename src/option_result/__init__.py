"""option-result: Option and Result types with short-circuit propagation.

Flat imports (preferred):
    from option_result import Option, Some, Nothing, Result, Ok, Err
    from option_result import catch_option, catch_result, propagate_result

Submodule imports (for organization):
    from option_result.option import Some, Nothing, Option
    from option_result.result import Ok, Err, Result
    from option_result.propagate import catch_result_async
"""

# Configuration
from option_result._config import PropagationConfig, get_config, init

# Errors
from option_result.errors import (
    AssertedFailureError,
    EmptyAccessError,
    PropagationTypeMismatchError,
    UnwrapError,
)

# Option types
from option_result.option import (
    Nothing,
    NothingType,
    Option,
    Some,
    from_nullable,
)

# Propagation
from option_result.propagate import (
    catch_option,
    catch_option_async,
    catch_result,
    catch_result_async,
    propagate_option,
    propagate_result,
)

# Result types
from option_result.result import (
    Err,
    Ok,
    Result,
    from_optional,
)

__all__ = [
    # Option types
    'Nothing',
    'NothingType',
    'Option',
    'Some',
    'from_nullable',
    # Result types
    'Err',
    'Ok',
    'Result',
    'from_optional',
    # Propagation
    'catch_option',
    'catch_option_async',
    'catch_result',
    'catch_result_async',
    'propagate_option',
    'propagate_result',
    # Errors
    'AssertedFailureError',
    'EmptyAccessError',
    'PropagationTypeMismatchError',
    'UnwrapError',
    # Configuration
    'PropagationConfig',
    'get_config',
    'init',
]
