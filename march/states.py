"""States of a first-order chain: the two boundary sentinels and real items.

Real items are wrapped in :class:`Token` so they can never collide with the
:data:`START` and :data:`END` sentinels, whatever their value.
"""

import dataclasses
import typing


ItemType = typing.TypeVar("ItemType", bound=typing.Hashable)


class Sentinel:

	"""
	A sequence boundary marker. Instances compare by identity.
	"""

	__slots__ = ("name",)

	def __init__ (self, name: str) -> None:

		self.name = name


	def __repr__ (self) -> str:

		return self.name


	def __reduce__ (self) -> str:

		# Keep singletons unique across copy and pickle.
		return self.name


@dataclasses.dataclass(frozen=True)
class Token (typing.Generic[ItemType]):

	"""
	A real item in the chain. Equality and hashing follow the wrapped item.
	"""

	item: ItemType


START = Sentinel("START")
END = Sentinel("END")

State = typing.Union[Sentinel, Token]


def to_state (value: typing.Any) -> State:

	"""
	Return sentinels and tokens unchanged, wrapping anything else in a Token.
	"""

	if isinstance(value, (Sentinel, Token)):
		return value

	return Token(value)


def from_state (state: State) -> typing.Any:

	"""
	Unwrap a Token back to its item. Sentinels are returned as-is.
	"""

	if isinstance(state, Token):
		return state.item

	return state
