import pytest

from chip8emu.cpu import CPU
from chip8emu.disassembler import Disassembly, decode, disassemble_program


def test_decode_keeps_location_and_opcode():
    result = decode(0x6A02, 0x204)
    assert result.memory_location == 0x204
    assert result.opcode == 0x6A02


def test_clear_screen():
    assert decode(0x00E0, 0x200).assembly == "ERASE"


def test_return():
    assert decode(0x00EE, 0x200).assembly == "Return"


def test_nop_for_other_zero_opcodes():
    assert decode(0x0123, 0x200).assembly == "NOP 0x123"


@pytest.mark.parametrize("opcode, prefix", [(0x1ABC, "GOTO "), (0x2ABC, "DO "), (0xAABC, "I=")])
def test_address_opcodes_round_trip(opcode, prefix):
    assembly = decode(opcode, 0x200).assembly
    assert assembly.startswith(prefix + "0x")
    assert int(assembly[len(prefix):], 16) == opcode & 0x0FFF


def test_jump_with_offset_round_trip():
    assembly = decode(0xB456, 0x200).assembly
    assert assembly.startswith("GOTO V0+")
    assert int(assembly.split("+")[1], 16) == 0x456


def test_skip_not_equal_uses_not_equal_sign():
    assembly = decode(0x4202, 0x200).assembly
    assert "≠" in assembly
    assert assembly.startswith("SKF V2")


def test_skip_equal_registers():
    assembly = decode(0x5230, 0x200).assembly
    assert assembly.startswith("SKF V2=V3")


def test_load_immediate_round_trip():
    assembly = decode(0x6A2E, 0x200).assembly
    register, value = assembly.split("=")
    assert register == "V10"
    assert int(value, 16) == 0x2E


def test_unknown_arithmetic_opcode():
    assert decode(0x800F, 0x200).assembly == "0x800F not handled yet"


def test_key_skip_not_pressed():
    assert decode(0xE1A1, 0x200).assembly == "SKF V1≠KEY"


@pytest.mark.parametrize("opcode", [0xE1FF, 0xF1FF, 0xF000])
def test_unknown_opcodes(opcode):
    assert decode(opcode, 0x200).assembly == "Not implemented yet"


def test_draw_mentions_rows_and_registers():
    assembly = decode(0xDAB6, 0x200).assembly
    assert assembly.startswith("Draw 6 Rows")
    assert "X10" in assembly and "Y11" in assembly


def test_every_arithmetic_variant_is_distinct():
    texts = {decode(0x8120 | n, 0x200).assembly for n in (0, 1, 2, 3, 4, 5, 6, 7, 0xE)}
    assert len(texts) == 9


def test_disassemble_loaded_program():
    cpu = CPU()
    cpu.load_program(bytes([0x00, 0xE0, 0x12, 0x00, 0x00, 0xEE]))
    listing = disassemble_program(cpu)
    assert [item.memory_location for item in listing] == [0x200, 0x202, 0x204]
    assert [item.opcode for item in listing] == [0x00E0, 0x1200, 0x00EE]
    assert listing[0].assembly == "ERASE"
    assert listing[2].assembly == "Return"


def test_disassemble_matches_decode():
    cpu = CPU()
    cpu.load_program(bytes([0x6A, 0x02, 0xA2, 0xEA]))
    listing = disassemble_program(cpu)
    assert listing == [decode(0x6A02, 0x200), decode(0xA2EA, 0x202)]
    assert all(isinstance(item, Disassembly) for item in listing)


def test_disassemble_resets_program_counter():
    cpu = CPU()
    cpu.load_program(bytes([0x12, 0x00]))
    cpu.program_counter = 0x300
    disassemble_program(cpu)
    assert cpu.program_counter == 0x200


def test_disassemble_empty_program():
    assert disassemble_program(CPU()) == []