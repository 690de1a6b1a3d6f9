import sys
from pathlib import Path

import pytest

_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from cipherchain.cipher.block import encrypt_text
from cipherchain.cipher.classical import encrypt_repeating_key, encrypt_running_key
from cipherchain.cipher.registry import EngineRegistry
from cipherchain.config import Settings
from cipherchain.pipeline import Mode, PipelineSession, default_configuration


@pytest.fixture
def session():
    return PipelineSession(settings=Settings(), registry=EngineRegistry(block_mode="codebook"))


def test_default_configuration_layout():
    cfg = default_configuration(Settings())
    assert [(s.id, s.type, s.enabled) for s in cfg.stages] == [
        ("block1", "block", True),
        ("running1", "running-key", False),
        ("repeating1", "repeating-key", False),
    ]
    assert cfg.get("block1").parameters == {"key": "mysecretkey12345", "keyFormat": "text"}
    assert cfg.get("running1").parameters == {"key": "SECRET"}
    assert cfg.get("repeating1").parameters == {"key": "CIPHER"}


def test_initial_state(session):
    assert session.input == ""
    assert session.is_encrypting
    assert session.final_result == ""
    assert session.intermediate_results == []
    assert session.error is None


def test_set_input_runs_enabled_stages(session):
    session.set_input("Hello World!")
    assert session.final_result == encrypt_text("Hello World!", "mysecretkey12345")
    assert [r.stage_id for r in session.intermediate_results] == ["block1"]


def test_toggle_stage_recomputes(session):
    session.set_input("Hello World!")
    session.toggle_stage("block1", False)
    assert session.final_result == "Hello World!"
    session.toggle_stage("running1", True)
    assert session.final_result == encrypt_running_key("Hello World!", "SECRET")


def test_update_stage_param_recomputes(session):
    session.set_input("Hello World!")
    session.update_stage_param("block1", "key", "another key")
    assert session.final_result == encrypt_text("Hello World!", "another key")
    assert session.configuration.get("block1").parameters["keyFormat"] == "text"


def test_reorder_stages_changes_processing_order(session):
    session.toggle_stage("block1", False)
    session.toggle_stage("running1", True)
    session.toggle_stage("repeating1", True)
    session.set_input("attack at dawn")
    expected = encrypt_repeating_key(encrypt_running_key("attack at dawn", "SECRET"), "CIPHER")
    assert session.final_result == expected

    session.reorder_stages(2, 0)
    assert [s.id for s in session.configuration.stages] == ["repeating1", "block1", "running1"]
    expected = encrypt_running_key(encrypt_repeating_key("attack at dawn", "CIPHER"), "SECRET")
    assert session.final_result == expected


def test_reorder_out_of_range(session):
    with pytest.raises(IndexError):
        session.reorder_stages(0, 3)


def test_unknown_stage_id(session):
    with pytest.raises(KeyError):
        session.toggle_stage("nope", True)
    with pytest.raises(KeyError):
        session.update_stage_param("nope", "key", "x")


def test_toggle_mode_swaps_without_recompute(session):
    session.set_input("Hello World!")
    ciphertext = session.final_result

    session.toggle_mode()
    assert session.mode is Mode.DECRYPTING
    assert session.input == ciphertext
    assert session.final_result == "Hello World!"
    assert session.intermediate_results == []

    # The next edit runs the inverse chain.
    session.set_input(session.input)
    assert session.final_result == "Hello World!"
    assert [r.stage_id for r in session.intermediate_results] == ["block1"]


def test_error_keeps_last_displayed_results(session):
    session.toggle_mode()
    session.set_input(encrypt_text("secret note", "mysecretkey12345"))
    assert session.final_result == "secret note"

    session.set_input("this is not hex")
    assert session.error.startswith("block1 (block)")
    assert session.final_result == "secret note"

    session.set_input(encrypt_text("fixed", "mysecretkey12345"))
    assert session.error is None
    assert session.final_result == "fixed"


def test_toggle_mode_keeps_active_error(session):
    session.toggle_mode()
    session.set_input("this is not hex")
    assert session.error.startswith("block1 (block)")

    session.toggle_mode()
    assert session.is_encrypting
    assert session.error.startswith("block1 (block)")
    assert session.input == ""
    assert session.final_result == "this is not hex"


def test_reset_restores_initial_configuration(session):
    session.set_input("Hello")
    session.toggle_stage("block1", False)
    session.toggle_mode()
    session.reset()
    assert session.input == ""
    assert session.is_encrypting
    assert session.configuration.get("block1").enabled
    assert session.final_result == ""
