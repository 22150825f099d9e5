"""CHIP-8 stack operations."""

import jax.numpy as jnp

from chipvm.constants import STACK_SIZE
from chipvm.errors import StackOverflowError, StackUnderflowError
from chipvm.state import StackState


def push(stack: StackState, address: jnp.ndarray) -> StackState:
    """Push address onto stack."""
    new_data = stack.data.at[stack.pointer].set(address)
    return stack.replace(data=new_data, pointer=stack.pointer + 1)


def pop(stack: StackState) -> tuple[StackState, jnp.ndarray]:
    """Pop address from stack."""
    new_pointer = stack.pointer - 1
    popped_address = stack.data[new_pointer]
    new_data = stack.data.at[new_pointer].set(0)
    return stack.replace(data=new_data, pointer=new_pointer), popped_address


def check_push(stack: StackState, pc: int) -> None:
    """Raise if a push would exceed the stack depth.

    Works on concrete values only, so call it outside of traced code.
    """
    depth = int(stack.pointer)
    if depth >= STACK_SIZE:
        raise StackOverflowError(pc, depth)


def check_pop(stack: StackState, pc: int) -> None:
    """Raise if a pop would read below the bottom of the stack."""
    if int(stack.pointer) == 0:
        raise StackUnderflowError(pc)
