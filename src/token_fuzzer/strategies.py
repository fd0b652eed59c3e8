"""hypothesis strategies for valid address generators."""

from __future__ import annotations

from hypothesis import strategies as st

from .addrgen import AddressGenerator, max_seed
from .config import NUMBER_OF_ADDRESSES
from .types import AddressType


def address_types() -> st.SearchStrategy[AddressType]:
    return st.sampled_from(AddressType)


def address_generators(
    count: int = NUMBER_OF_ADDRESSES, avoid_degenerate: bool = False
) -> st.SearchStrategy[AddressGenerator]:
    strategy = st.builds(
        AddressGenerator,
        address_seed=st.integers(min_value=0, max_value=max_seed(count)),
        address_types=st.lists(address_types(), min_size=count, max_size=count).map(tuple),
    )
    if avoid_degenerate:
        strategy = strategy.filter(lambda g: not g.degenerate_slots())
    return strategy
