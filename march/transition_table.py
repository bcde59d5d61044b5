import logging
import random
import typing

import march.states


logger = logging.getLogger(__name__)

OptionType = typing.TypeVar("OptionType")


def choose_weighted (options: typing.List[typing.Tuple[OptionType, int]], rng: random.Random) -> OptionType:

	"""
	Choose one option from a list of (option, weight) pairs.

	A single integer draw in ``[0, total)`` is compared against a running
	total; the first option whose cumulative weight exceeds the draw wins.
	For a fixed rng stream and option order the result is deterministic.
	"""

	if not options:
		raise ValueError("Options cannot be empty")

	total_weight = 0

	for _, weight in options:
		if weight <= 0:
			raise ValueError("Weights must be positive")
		total_weight += weight

	roll = rng.randrange(total_weight)

	if not 0 <= roll < total_weight:
		raise ValueError(f"Random source returned {roll!r}, expected a value in [0, {total_weight})")

	accum = 0

	for option, weight in options:
		accum += weight
		if roll < accum:
			return option

	# Unreachable once the roll has been range-checked.
	raise ValueError(f"Roll {roll!r} did not select an option")


class TransitionTable:

	"""
	Successor counts for every observed predecessor state.

	Counts are positive integers and only ever grow. A predecessor is present
	only once it has at least one successor, so an absent key means every
	count is zero. Successors keep insertion order, which fixes the order
	used by :meth:`sample`.
	"""

	def __init__ (self) -> None:

		"""
		Initialize an empty table.
		"""

		self._counts: typing.Dict[march.states.State, typing.Dict[march.states.State, int]] = {}


	def record (self, source: march.states.State, target: march.states.State, count: int = 1) -> None:

		"""
		Add ``count`` observations of ``source`` followed by ``target``.
		"""

		if isinstance(count, bool) or not isinstance(count, int) or count <= 0:
			raise ValueError(f"Count must be a positive integer, got {count!r}")

		if source is march.states.END:
			raise ValueError("END cannot have successors")

		if target is march.states.START:
			raise ValueError("START cannot follow another state")

		if source not in self._counts:
			self._counts[source] = {}

		successors = self._counts[source]

		if target in successors:
			successors[target] += count

		else:
			successors[target] = count


	def successors (self, source: march.states.State) -> typing.Dict[march.states.State, int]:

		"""
		Return a copy of the successor counts for ``source`` (empty if unseen).
		"""

		if source not in self._counts:
			return {}

		return dict(self._counts[source])


	def count (self, source: march.states.State, target: march.states.State) -> int:

		"""
		Return how often ``target`` followed ``source`` (0 if never).
		"""

		return self._counts.get(source, {}).get(target, 0)


	def total (self, source: march.states.State) -> int:

		"""
		Return the sum of all successor counts for ``source``.
		"""

		return sum(self._counts.get(source, {}).values())


	def sample (self, source: march.states.State, rng: random.Random) -> typing.Optional[march.states.State]:

		"""
		Pick a successor of ``source`` with probability proportional to its count.

		Returns ``None`` when ``source`` has no recorded successors.
		"""

		successors = self._counts.get(source)

		if not successors:
			return None

		return choose_weighted(list(successors.items()), rng)


	def states (self) -> typing.List[march.states.State]:

		"""
		Return every predecessor state in the order it was first recorded.
		"""

		return list(self._counts)


	def transitions (self) -> typing.Iterator[typing.Tuple[march.states.State, march.states.State, int]]:

		"""
		Yield every ``(source, target, count)`` triple.
		"""

		for source, successors in self._counts.items():
			for target, count in successors.items():
				yield source, target, count


	def copy (self) -> "TransitionTable":

		"""
		Return an independent copy of this table.
		"""

		duplicate = TransitionTable()
		duplicate._counts = {source: dict(successors) for source, successors in self._counts.items()}

		return duplicate


	def clear (self) -> None:

		"""
		Forget every recorded transition.
		"""

		logger.debug(f"Clearing transition table with {len(self._counts)} states")
		self._counts.clear()


	def __len__ (self) -> int:

		return len(self._counts)


	def __contains__ (self, source: object) -> bool:

		return source in self._counts


	def __eq__ (self, other: object) -> bool:

		if not isinstance(other, TransitionTable):
			return NotImplemented

		return self._counts == other._counts


	def __repr__ (self) -> str:

		edges = sum(len(successors) for successors in self._counts.values())

		return f"TransitionTable(states={len(self._counts)}, transitions={edges})"
