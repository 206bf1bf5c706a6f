from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class FilterProfile:
    """
    Represents the control dependencies and required fields of a view.

    Fields:

    :param ordinate: field that must be finite besides rating (year for the
                     dashboard, runtime for the static scatter)
    :param fixed_x: X field when the view has no metric selector
    :param metric: the view offers the X-metric selector
    :param director: the view offers the director filter
    :param year_range: the view offers the two year-bound controls
    :param brush: the view supports rectangular brush selection
    """
    ordinate: str
    fixed_x: Optional[str] = None
    metric: bool = False
    director: bool = False
    year_range: bool = False
    brush: bool = False
