"""The Markov chain: learn item transitions from sequences and walk them.

:class:`Chain` owns one :class:`~march.transition_table.TransitionTable`.
:meth:`Chain.feed` adds one sequence at a time, bracketed by the ``START``
and ``END`` sentinels. :meth:`Chain.generate` walks from ``START`` until it
samples ``END``, runs into a state with no successors, or reaches the step
ceiling, whichever comes first.

Randomness is always injected: either a ``random.Random`` passed to the
constructor (or to a single call), or a private one built from ``seed``.
Nothing touches the module-level ``random`` functions.
"""

import dataclasses
import enum
import logging
import random
import typing

import march.constants
import march.states
import march.transition_table


logger = logging.getLogger(__name__)


class WalkOutcome (enum.Enum):

	"""Why a walk stopped."""

	END = "end"
	STEP_LIMIT = "step_limit"
	DEAD_END = "dead_end"


@dataclasses.dataclass
class Walk (typing.Generic[march.states.ItemType]):

	"""
	The result of one walk through a chain.

	Attributes:
		items: The generated items, without sentinels.
		outcome: ``END`` if the walk sampled the end sentinel, ``STEP_LIMIT``
			if it was cut off by the step ceiling, ``DEAD_END`` if it reached a
			state with no successors (including an empty chain).
	"""

	items: typing.List[march.states.ItemType]
	outcome: WalkOutcome

	@property
	def finished (self) -> bool:

		"""Return True if the walk reached the end sentinel naturally."""

		return self.outcome is WalkOutcome.END


def _check_max_steps (max_steps: int) -> int:

	if isinstance(max_steps, bool) or not isinstance(max_steps, int) or max_steps < 0:
		raise ValueError(f"max_steps must be a non-negative integer, got {max_steps!r}")

	return max_steps


class Chain (typing.Generic[march.states.ItemType]):

	"""
	A first-order Markov chain over hashable items.

	Example:
		```python
		chain = march.Chain(seed=7)
		chain.feed("the quick brown fox".split()).feed("the lazy dog".split())
		words = chain.generate()
		```
	"""

	def __init__ (
		self,
		rng: typing.Optional[random.Random] = None,
		seed: typing.Optional[int] = None,
		max_steps: int = march.constants.DEFAULT_MAX_STEPS
	) -> None:

		"""
		Initialize an empty chain.

		Parameters:
			rng: Randomness source used by generation. Anything with a
				``randrange`` method compatible with ``random.Random`` works.
			seed: Seed for a private ``random.Random`` when ``rng`` is not given.
			max_steps: Most items any single walk may emit.
		"""

		if rng is not None and seed is not None:
			raise ValueError("Pass either rng or seed, not both")

		self.table: march.transition_table.TransitionTable = march.transition_table.TransitionTable()
		self.rng = rng if rng is not None else random.Random(seed)
		self.max_steps = _check_max_steps(max_steps)


	def feed (self, items: typing.Iterable[march.states.ItemType]) -> "Chain[march.states.ItemType]":

		"""
		Learn the transitions of one sequence. Returns the chain for chaining.

		Empty sequences record nothing. Any iterable works, including
		one-shot iterators. The whole sequence is consumed and checked
		before anything is recorded, so a feed that raises leaves the table
		unchanged.

		Every item is wrapped as a real item, even one that is itself a
		``Token`` or a sentinel; see :meth:`record` for the raw form.
		"""

		states: typing.List[march.states.State] = [march.states.Token(item) for item in items]

		# Unhashable items raise here, before the table is touched.
		for state in states:
			hash(state)

		if states:
			path = [march.states.START] + states + [march.states.END]

			for source, target in zip(path, path[1:]):
				self.table.record(source, target)

		logger.debug(f"Fed {len(states)} items, table now holds {len(self.table)} states")

		return self


	def record (self, source: typing.Any, target: typing.Any, count: int = 1) -> None:

		"""
		Add a single transition directly.

		``source`` and ``target`` may be raw items or the ``START`` / ``END``
		sentinels. Useful for loading counts gathered elsewhere.

		Unlike :meth:`feed`, sentinels and ``Token`` values are taken as
		states rather than wrapped, so ``record(START, "a")`` is the same edge
		``feed(["a"])`` begins with. Items that are themselves sentinels or
		tokens can only be learned through :meth:`feed`, and
		:meth:`transitions` reports them unwrapped one level.
		"""

		self.table.record(march.states.to_state(source), march.states.to_state(target), count)


	def transitions (self) -> typing.Iterator[typing.Tuple[typing.Any, typing.Any, int]]:

		"""
		Yield ``(source, target, count)`` with items unwrapped and sentinels kept.
		"""

		for source, target, count in self.table.transitions():
			yield march.states.from_state(source), march.states.from_state(target), count


	def generate (
		self,
		rng: typing.Optional[random.Random] = None,
		max_steps: typing.Optional[int] = None
	) -> typing.List[march.states.ItemType]:

		"""
		Walk the chain from ``START`` and return the items visited.

		An unfed chain yields an empty list. The walk never raises on sparse
		data; it stops early instead.
		"""

		return self.walk(rng=rng, max_steps=max_steps).items


	def walk (
		self,
		rng: typing.Optional[random.Random] = None,
		max_steps: typing.Optional[int] = None
	) -> Walk[march.states.ItemType]:

		"""
		Like :meth:`generate`, but also report why the walk stopped.
		"""

		items: typing.List[march.states.ItemType] = []
		walker = self._walker(rng, max_steps)

		while True:

			try:
				items.append(next(walker))

			except StopIteration as stop:
				return Walk(items=items, outcome=stop.value)


	def generate_iter (
		self,
		rng: typing.Optional[random.Random] = None,
		max_steps: typing.Optional[int] = None
	) -> typing.Iterator[march.states.ItemType]:

		"""
		Lazily yield items from one walk. Same stopping rules as :meth:`generate`.

		The table must not be fed while the iterator is being consumed.
		"""

		yield from self._walker(rng, max_steps)


	def _walker (
		self,
		rng: typing.Optional[random.Random],
		max_steps: typing.Optional[int]
	) -> typing.Generator[march.states.ItemType, None, WalkOutcome]:

		rng = rng if rng is not None else self.rng
		limit = self.max_steps if max_steps is None else _check_max_steps(max_steps)

		state: march.states.State = march.states.START
		steps = 0

		while True:

			successor = self.table.sample(state, rng)

			if successor is None:
				if state is not march.states.START:
					logger.warning(f"Walk reached {state!r} which has no successors, stopping after {steps} items")
				return WalkOutcome.DEAD_END

			if successor is march.states.END:
				return WalkOutcome.END

			# Only a real item beyond the ceiling counts as exceeding it.
			if steps >= limit:
				logger.warning(f"Walk stopped at the step limit of {limit} items")
				return WalkOutcome.STEP_LIMIT

			steps += 1
			yield successor.item
			state = successor
