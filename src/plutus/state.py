"""Application state and the reducer that updates it."""
from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum
from typing import Tuple, Union

from plutus.ledger.models import (
    Category,
    TransactionType,
    default_category,
    parse_amount,
)
from plutus.reports.aggregator import Granularity
from plutus.utils.exceptions import ValidationError


class Tab(int, Enum):
    DASHBOARD = 0
    ANALYSIS = 1
    ADVISOR = 2


@dataclass(frozen=True)
class AppState:
    current_tab: Tab = Tab.DASHBOARD
    granularity: Granularity = Granularity.DAILY
    form_title: str = ""
    form_amount: str = ""
    form_type: TransactionType = TransactionType.EXPENSE
    form_category: Category = default_category(TransactionType.EXPENSE)
    question: str = ""
    advice: str = ""
    is_loading_advice: bool = False
    loaded: bool = False


# Actions

@dataclass(frozen=True)
class SelectTab:
    tab: Tab


@dataclass(frozen=True)
class SelectGranularity:
    granularity: Granularity


@dataclass(frozen=True)
class EditTitle:
    title: str


@dataclass(frozen=True)
class EditAmount:
    amount: str


@dataclass(frozen=True)
class SelectType:
    txn_type: TransactionType


@dataclass(frozen=True)
class SelectCategory:
    category: Category


@dataclass(frozen=True)
class ClearForm:
    pass


@dataclass(frozen=True)
class EditQuestion:
    question: str


@dataclass(frozen=True)
class AdviceRequested:
    pass


@dataclass(frozen=True)
class AdviceReceived:
    advice: str


@dataclass(frozen=True)
class AdviceFailed:
    message: str


@dataclass(frozen=True)
class DataLoaded:
    pass


Action = Union[
    SelectTab, SelectGranularity, EditTitle, EditAmount, SelectType, SelectCategory,
    ClearForm, EditQuestion, AdviceRequested, AdviceReceived, AdviceFailed, DataLoaded,
]


def reduce(state: AppState, action: Action) -> AppState:
    """Return the state that results from applying ``action`` to ``state``."""
    if isinstance(action, SelectTab):
        return replace(state, current_tab=Tab(action.tab))
    if isinstance(action, SelectGranularity):
        return replace(state, granularity=Granularity(action.granularity))
    if isinstance(action, EditTitle):
        return replace(state, form_title=action.title)
    if isinstance(action, EditAmount):
        return replace(state, form_amount=action.amount)
    if isinstance(action, SelectType):
        txn_type = TransactionType(action.txn_type)
        if txn_type is state.form_type:
            return state
        return replace(state, form_type=txn_type, form_category=default_category(txn_type))
    if isinstance(action, SelectCategory):
        if not isinstance(action.category, type(default_category(state.form_type))):
            raise ValidationError(
                f"'{action.category.value}' is not a {state.form_type.value} category"
            )
        return replace(state, form_category=action.category)
    if isinstance(action, ClearForm):
        return replace(state, form_title="", form_amount="")
    if isinstance(action, EditQuestion):
        return replace(state, question=action.question)
    if isinstance(action, AdviceRequested):
        if state.is_loading_advice:
            return state
        return replace(state, is_loading_advice=True, advice="")
    if isinstance(action, AdviceReceived):
        return replace(state, is_loading_advice=False, advice=action.advice)
    if isinstance(action, AdviceFailed):
        return replace(state, is_loading_advice=False, advice=f"Error: {action.message}")
    if isinstance(action, DataLoaded):
        return replace(state, loaded=True)
    raise TypeError(f"Unknown action: {action!r}")


def form_to_draft(state: AppState) -> Tuple[str, Decimal, TransactionType, Category]:
    """
    Validate the add-transaction form.

    Returns:
        ``(title, amount, type, category)`` ready for ``TransactionStore.add``
    """
    title = state.form_title.strip()
    if not title or not state.form_amount.strip() or state.form_category is None:
        raise ValidationError("Please fill in all fields")
    amount = parse_amount(state.form_amount)
    return title, amount, state.form_type, state.form_category
