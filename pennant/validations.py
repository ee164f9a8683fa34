"""
Pennant validations: post-coercion predicates with their own error descriptions.

Overview
- Validation: abstract capability {is_valid(value), error(value)}; is_invalid()
  is derived. Validations never touch the value store; they see one coerced value.
- Order / OrderValidation: compare a value with a fixed bound
  (>, >=, <, <=); the bound must support ordering.
- ChoiceValidation: the value must be one of a fixed collection.

Composition
- Args.validated_value_of(name, [v1, v2, ...], type) runs validations in order;
  the first invalid one raises its error and the rest are skipped.

Quick example:
    >>> positive = OrderValidation.greater_than(0)
    >>> positive.is_valid(1), positive.is_valid(0)
    (True, False)
    >>> str(positive.error(0))
    'order invalid: 0 is not greater than 0'
"""
import enum
import operator
from abc import ABC, abstractmethod
from collections.abc import Iterable, Set

from .faults import ValidationError


class Validation(ABC):
    """
    A predicate over one coerced value plus a description of why it failed.
    """

    @abstractmethod
    def is_valid(self, value, /):
        """
        Whether the validation passes for the provided value.
        """

    @abstractmethod
    def error(self, value, /):
        """
        An ArgsError describing the invalid state for the provided value.
        """

    def is_invalid(self, value, /):
        return not self.is_valid(value)


class Order(enum.Enum):
    """
    The relationship used by OrderValidation; each member compares
    (value, bound) and prints as its English relation.
    """
    GREATER_THAN = ("greater than", operator.gt)
    GREATER_THAN_OR_EQUAL = ("greater than or equal to", operator.ge)
    LESS_THAN = ("less than", operator.lt)
    LESS_THAN_OR_EQUAL = ("less than or equal to", operator.le)

    def __init__(self, relation, comparator):
        self.relation = relation
        self.comparator = comparator

    def compare(self, bound, value, /):
        """
        Compare the provided value to the provided bound.
        """
        return self.comparator(value, bound)

    def __str__(self):
        return self.relation


class OrderValidation(Validation):
    """
    Validates that a value stands in a given Order relative to a bound.

    The bound has to support ordering against itself; types that do not
    (e.g. complex, plain objects) are rejected at construction.
    """

    def __init__(self, order, bound, /):
        if not isinstance(order, Order):
            raise TypeError("OrderValidation() 'order' must be an Order")
        try:
            order.compare(bound, bound)
        except TypeError:
            raise TypeError("OrderValidation() 'bound' must support ordering, got %r" % type(bound).__name__) from None
        self._order = order
        self._bound = bound

    @property
    def order(self):
        return self._order

    @property
    def bound(self):
        return self._bound

    @classmethod
    def greater_than(cls, bound, /):
        return cls(Order.GREATER_THAN, bound)

    @classmethod
    def greater_than_or_equal(cls, bound, /):
        return cls(Order.GREATER_THAN_OR_EQUAL, bound)

    @classmethod
    def less_than(cls, bound, /):
        return cls(Order.LESS_THAN, bound)

    @classmethod
    def less_than_or_equal(cls, bound, /):
        return cls(Order.LESS_THAN_OR_EQUAL, bound)

    def is_valid(self, value, /):
        return self._order.compare(self._bound, value)

    def error(self, value, /):
        return ValidationError(
            "%s is not %s %s" % (value, self._order, self._bound),
            scope="order invalid",
            value=value,
            order=self._order,
            bound=self._bound,
        )

    def __repr__(self):
        return "OrderValidation(%s, %r)" % (self._order.name, self._bound)


class ChoiceValidation(Validation):
    """
    Validates that a value is one of a fixed collection of choices.

    Choices keep their given order for messages; duplicates are rejected
    unless a Set is given.
    """

    def __init__(self, choices, /):
        if isinstance(choices, str) or not isinstance(choices, Iterable):
            raise TypeError("ChoiceValidation() 'choices' must be a non-string iterable")
        if not isinstance(choices, Set):
            sanitized = []
            for choice in choices:
                if choice in sanitized:
                    raise ValueError("ChoiceValidation() 'choices' cannot contain duplicates")
                sanitized.append(choice)
            choices = tuple(sanitized)
        if not choices:
            raise ValueError("ChoiceValidation() 'choices' cannot be empty")
        self._choices = choices

    @property
    def choices(self):
        return self._choices

    def is_valid(self, value, /):
        return value in self._choices

    def error(self, value, /):
        return ValidationError(
            "%s is not one of %s" % (value, ", ".join(map(str, self._choices))),
            scope="choice invalid",
            value=value,
            choices=self._choices,
        )

    def __repr__(self):
        return "ChoiceValidation(%r)" % (self._choices,)


__all__ = (
    "Validation",
    "Order",
    "OrderValidation",
    "ChoiceValidation",
)
