# Copyright 2024 Brian T. Park
#
# MIT License

"""
Find the list of data files compiled by 'zic' from the variable definitions of
the tzcode Makefile. The relevant part of the Makefile looks like this:

    PRIMARY_YDATA=	africa antarctica asia australasia \
			europe northamerica southamerica
    YDATA=		$(PRIMARY_YDATA) etcetera
    NDATA=		factory
    BACKWARD=	backward
    TDATA=		$(YDATA) $(NDATA) $(BACKWARD)

Only simple 'NAME= value' definitions and '$(NAME)' or '${NAME}' references
are understood, which is all the TDATA variable has ever needed.
"""

import re
from typing import Dict
from typing import List
from typing import Optional
from typing import Set

DEFINITION_PATTERN = re.compile(r'([A-Za-z_][A-Za-z0-9_]*)[ \t]*[:?]?=(.*)')
REFERENCE_PATTERN = re.compile(r'\$[({]([A-Za-z_][A-Za-z0-9_]*)[)}]')


def parse_variables(contents: str) -> Dict[str, str]:
    """Return the {name -> unexpanded value} of the variables defined in the
    Makefile. Continuation lines are joined, comments and rules are ignored.
    A later definition replaces an earlier one.
    """
    variables: Dict[str, str] = {}
    for line in _logical_lines(contents):
        if line.startswith('\t') or line.startswith('#'):
            continue
        match = DEFINITION_PATTERN.fullmatch(line)
        if match:
            value = match.group(2).split('#', 1)[0]
            variables[match.group(1)] = value.strip()
    return variables


def expand(
    value: str,
    variables: Dict[str, str],
    expanding: Optional[Set[str]] = None,
) -> str:
    """Recursively expand the variable references in value. Undefined
    variables expand to the empty string, as in make(1).
    """
    if expanding is None:
        expanding = set()

    def replace(match: 're.Match[str]') -> str:
        name = match.group(1)
        if name in expanding:
            raise ValueError(f"Recursive Makefile variable {name}")
        return expand(
            variables.get(name, ''), variables, expanding | {name})

    return REFERENCE_PATTERN.sub(replace, value)


def find_data_files(contents: str, variable: str = 'TDATA') -> List[str]:
    """Return the data file names listed by the given variable (default
    'TDATA') of the Makefile, or an empty list if it is not defined.
    """
    variables = parse_variables(contents)
    value = variables.get(variable)
    if value is None:
        return []
    return expand(value, variables).split()


def _logical_lines(contents: str) -> List[str]:
    """Join the lines ending with a backslash with the following line."""
    lines: List[str] = []
    pending = ''
    for line in contents.split('\n'):
        if line.endswith('\\'):
            pending += line[:-1] + ' '
            continue
        lines.append(pending + line)
        pending = ''
    if pending:
        lines.append(pending)
    return lines
