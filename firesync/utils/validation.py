"""
Task option validation
"""
from collections import namedtuple


# Required options and the hint shown when one is missing.
REQUIRED_OPTIONS = {
    'reference': 'Define a Database firebase URL (only root path).',
    'path': 'Path in Database to use',
    'credential': 'Credential Data from Firebase Admin Credential file.',
}

DATA_HINT = 'Data to merge into the path must be a JSON object.'

OptionViolation = namedtuple('OptionViolation', ['option', 'msg', 'problem'], defaults=['undefined'])


def validate_options(options, required=None):
    """
    Check that every required option is set and ``data`` is a mapping.

    All violations are reported, not just the first one. An option counts
    as missing when it is absent or falsy (``None``, ``""``, ``{}``).

    Args:
        options: Mapping of option name to value
        required: Mapping of option name to hint message
            (defaults to :data:`REQUIRED_OPTIONS`)

    Returns:
        List of :class:`OptionViolation`, empty if the options are valid

    Example:
        >>> [v.option for v in validate_options({'path': '/test', 'data': 'x'})]
        ['reference', 'credential', 'data']
    """
    if required is None:
        required = REQUIRED_OPTIONS

    violations = [
        OptionViolation(option, msg)
        for option, msg in required.items()
        if not options.get(option)
    ]

    data = options.get('data')
    if data is not None and not isinstance(data, dict):
        violations.append(OptionViolation('data', DATA_HINT, 'invalid'))

    return violations


def format_violation(violation):
    """Render a violation the way it is reported to the user."""
    return f"options.{violation.option} {violation.problem}: {violation.msg}"
