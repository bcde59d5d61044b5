"""
march - a small generic Markov chain for Python.

Feed it ordered sequences of hashable items (words, MIDI note numbers,
anything you can tokenize) and it learns how often each item follows each
other item. Generation walks those counts at random, weighted by how often
each transition was seen.

- **First-order only.** The next item depends on the current item alone.
- **Explicit boundaries.** Every fed sequence is bracketed by ``START`` and
  ``END`` sentinels that can never collide with real items.
- **Bounded walks.** Generation stops at ``END``, at a dead end, or at a
  configurable step ceiling (``max_steps``), so cyclic tables terminate.
- **Repeatable.** Pass ``seed=`` or your own ``random.Random`` to get the
  same output every run.

Example:
	```python
	import march

	chain = march.Chain(seed=42)
	chain.feed("the quick brown fox jumped over the lazy dog".split())
	print(" ".join(chain.generate()))
	```

Tokenizing input, printing output and saving models are left to the caller.

Package-level exports: ``Chain``, ``Walk``, ``WalkOutcome``, ``TransitionTable``,
``choose_weighted``, ``Token``, ``START``, ``END``.
"""

import march.chain
import march.states
import march.transition_table


Chain = march.chain.Chain
Walk = march.chain.Walk
WalkOutcome = march.chain.WalkOutcome
TransitionTable = march.transition_table.TransitionTable
choose_weighted = march.transition_table.choose_weighted
Token = march.states.Token
START = march.states.START
END = march.states.END
