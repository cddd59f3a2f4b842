"""
Dynamic SQL construction.

Builds parameterized SQL fragments from a variable set of caller-supplied
fields. Nothing here executes SQL: every builder returns a SqlFragment whose
text uses positional placeholders ($1, $2, ...) and whose params list carries
the values in placeholder order. Values never appear in the SQL text.

The persistence layer (app.crud.base) compiles the placeholders into bind
parameters for the active SQLAlchemy dialect.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Tuple, Union

from app.core.exceptions import InvalidInputError
from app.schemas.company import CompanyFilter
from app.schemas.job import JobFilter

Fields = Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]


@dataclass(frozen=True)
class SqlFragment:
    """A SQL text fragment and its positional parameters ($k -> params[k-1])."""

    sql: str
    params: List[Any] = field(default_factory=list)

    def next_placeholder(self) -> str:
        """Placeholder for a value appended after this fragment's params."""
        return placeholder(len(self.params) + 1)

    def __bool__(self) -> bool:
        return bool(self.sql)


def placeholder(position: int) -> str:
    return f"${position}"


def quote_ident(name: str) -> str:
    """
    Quote a column name so reserved words and mixed case survive.

    Embedded double quotes are doubled, so the result is always a single
    identifier token.
    """
    return '"' + name.replace('"', '""') + '"'


def sql_for_partial_update(fields: Fields, column_map: Mapping[str, str]) -> SqlFragment:
    """
    Build the SET clause of a partial update.

    Only the supplied fields are changed; a field set to None becomes NULL.
    Field names are translated through column_map, falling back to the field
    name itself.

        {"firstName": "Aliya", "age": 32}, {"firstName": "first_name"}
        -> '"first_name"=$1, "age"=$2', ["Aliya", 32]

    The caller appends its row-selection value to params and numbers it with
    SqlFragment.next_placeholder().

    Raises:
        InvalidInputError: If fields is empty
    """
    pairs = list(fields.items()) if isinstance(fields, Mapping) else list(fields)
    if not pairs:
        raise InvalidInputError("No data")

    cols = [
        f"{quote_ident(column_map.get(name, name))}={placeholder(idx)}"
        for idx, (name, _) in enumerate(pairs, start=1)
    ]

    return SqlFragment(", ".join(cols), [value for _, value in pairs])


class WhereBuilder:
    """
    Ordered list of predicates with a parallel parameter list.

    Each `{}` slot in a predicate template is replaced by the placeholder of
    the value appended for it, so numbering always follows the final
    parameter list:

        builder = WhereBuilder()
        builder.add("salary >= {}", 1000)
        builder.add("equity > 0")
        builder.build()  # -> "salary >= $1 AND equity > 0", [1000]
    """

    def __init__(self):
        self._predicates: List[str] = []
        self._params: List[Any] = []

    def add(self, template: str, *values: Any) -> "WhereBuilder":
        slots = []
        for value in values:
            self._params.append(value)
            slots.append(placeholder(len(self._params)))
        self._predicates.append(template.format(*slots))
        return self

    def build(self) -> SqlFragment:
        return SqlFragment(" AND ".join(self._predicates), list(self._params))


def sql_for_job_filters(criteria: JobFilter) -> SqlFragment:
    """
    Build the WHERE predicates for a job search.

    Predicates are added in a fixed order (title, salary, equity) and only for
    criteria that were supplied. has_equity filters only when it is True;
    False and None both mean "no equity filter".
    """
    builder = WhereBuilder()

    if criteria.title_contains is not None:
        builder.add("title ILIKE {}", f"%{criteria.title_contains}%")

    if criteria.min_salary is not None:
        builder.add("salary >= {}", criteria.min_salary)

    if criteria.has_equity is True:
        builder.add("equity > 0")

    return builder.build()


def sql_for_company_filters(criteria: CompanyFilter) -> SqlFragment:
    """
    Build the WHERE predicates for a company search.

    Raises:
        InvalidInputError: If min_employees is greater than max_employees
    """
    min_employees = criteria.min_employees
    max_employees = criteria.max_employees
    if min_employees is not None and max_employees is not None and min_employees > max_employees:
        raise InvalidInputError("minEmployees cannot be greater than maxEmployees")

    builder = WhereBuilder()

    if criteria.name_like is not None:
        builder.add("name ILIKE {}", f"%{criteria.name_like}%")

    if min_employees is not None:
        builder.add("num_employees >= {}", min_employees)

    if max_employees is not None:
        builder.add("num_employees <= {}", max_employees)

    return builder.build()


def where(fragment: SqlFragment) -> str:
    """Render a WHERE clause, or nothing when no predicates were added."""
    return f" WHERE {fragment.sql}" if fragment else ""
