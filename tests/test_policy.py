from __future__ import annotations

import pytest

from task_registry.domain import policy
from task_registry.domain.errors import Unauthorized
from task_registry.domain.policy import Operation
from task_registry.domain.task_models import Task

OWNER = "owner-o"
TASK = Task(id=1, assigned_to="alice")


@pytest.mark.parametrize("operation", [Operation.pause, Operation.resume, Operation.owner_delete])
def test_owner_operations(operation):
    assert policy.is_allowed(OWNER, operation, owner=OWNER, task=TASK)
    assert not policy.is_allowed("alice", operation, owner=OWNER, task=TASK)


@pytest.mark.parametrize("operation", [Operation.complete, Operation.delete, Operation.reassign, Operation.update])
def test_assignee_operations(operation):
    assert policy.is_allowed("alice", operation, owner=OWNER, task=TASK)
    # the owner has no assignee rights
    assert not policy.is_allowed(OWNER, operation, owner=OWNER, task=TASK)
    assert not policy.is_allowed("alice", operation, owner=OWNER, task=None)


def test_create_is_open_to_any_identified_caller():
    assert policy.is_allowed("bob", Operation.create, owner=OWNER)
    assert not policy.is_allowed("", Operation.create, owner=OWNER)


def test_cleared_slot_has_no_assignee():
    assert not policy.is_allowed("", Operation.delete, owner=OWNER, task=Task())


def test_require_raises_unauthorized():
    with pytest.raises(Unauthorized, match="requires the owner"):
        policy.require("alice", Operation.pause, owner=OWNER)
    with pytest.raises(Unauthorized, match="requires the assignee"):
        policy.require("bob", Operation.complete, owner=OWNER, task=TASK)
