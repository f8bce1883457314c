"""Property-based tests for signal resolution."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from procprobe.exceptions import UnknownSignalError
from procprobe.signals import SIGNALS, resolve_signal, signal_name

signal_names = st.sampled_from(sorted(SIGNALS))


@pytest.mark.property
@pytest.mark.unit
class TestSignalProperties:
    @given(name=signal_names)
    def test_name_resolves_to_table_number(self, name: str) -> None:
        assert resolve_signal(name) == SIGNALS[name]

    @given(name=signal_names)
    def test_number_maps_back_to_known_name(self, name: str) -> None:
        # aliases (SIGIOT, SIGPOLL) share a number with another name
        canonical = signal_name(resolve_signal(name))
        assert canonical is not None
        assert SIGNALS[canonical] == SIGNALS[name]

    @given(num=st.integers(min_value=0, max_value=2**31 - 1))
    def test_non_negative_numbers_pass_through(self, num: int) -> None:
        assert resolve_signal(num) == num

    @given(num=st.integers(max_value=-1))
    def test_negative_numbers_rejected(self, num: int) -> None:
        with pytest.raises(UnknownSignalError):
            resolve_signal(num)

    @given(text=st.text(max_size=12).filter(lambda s: s not in SIGNALS))
    def test_unknown_names_rejected(self, text: str) -> None:
        with pytest.raises(UnknownSignalError):
            resolve_signal(text)
