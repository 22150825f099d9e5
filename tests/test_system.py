"""Tests for system instructions (0xxx)."""

import jax.numpy as jnp
from chipvm import execute


def test_execute_clear_screen(fresh_state):
    """Test 00E0 - Clear display."""
    state = fresh_state.replace(display=fresh_state.display.at[0, 0].set(True))

    state = execute(state, 0x00E0)

    assert jnp.sum(state.display) == 0
    assert bool(state.draw_flag)


def test_execute_call_and_return(fresh_state):
    """Test 2NNN (call) and 00EE (return) together."""
    state = fresh_state
    initial_pc = state.pc

    # Call subroutine
    state = execute(state, 0x2300)  # Call 0x300
    assert state.pc == 0x300
    assert state.stack.pointer == 1
    assert state.stack.data[state.stack.pointer - 1] == initial_pc

    # Return from subroutine
    state = execute(state, 0x00EE)
    assert state.pc == initial_pc
    assert state.stack.pointer == 0


def test_nested_calls_unwind_in_order(fresh_state):
    """Returns pop addresses in reverse call order."""
    state = fresh_state.replace(pc=fresh_state.pc + 2)
    state = execute(state, 0x2300)
    state = state.replace(pc=state.pc + 2)
    state = execute(state, 0x2400)
    assert state.stack.pointer == 2

    state = execute(state, 0x00EE)
    assert state.pc == 0x302
    state = execute(state, 0x00EE)
    assert state.pc == 0x202
    assert state.stack.pointer == 0


def test_machine_call_is_ignored(fresh_state):
    """0NNN is not emulated and leaves the state alone."""
    state = execute(fresh_state, 0x0123)

    assert state.pc == fresh_state.pc
    assert jnp.array_equal(state.V, fresh_state.V)
    assert state.stack.pointer == 0
