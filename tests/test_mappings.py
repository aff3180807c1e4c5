"""Tests for mappings -- logical light/input identifiers and report locations."""

import pytest

from minimaid.constants import LIGHTS_REPORT_SIZE
from minimaid.mappings import (
    CABINET_LIGHT_MAPPINGS,
    INPUT_OFFSETS,
    INPUT_TO_PAD_LIGHT,
    PAD_LIGHT_MAPPINGS,
    CabinetLight,
    Input,
    LightMapping,
    PadLight,
    as_member,
    input_mask,
)


# =========================================================================
# Light tables
# =========================================================================

class TestLightMappings:
    """Pad and cabinet light tables."""

    def test_enum_sizes(self):
        assert len(PadLight) == 8
        assert len(CabinetLight) == 7
        assert len(Input) == 14

    def test_pad_table_covers_every_light(self):
        assert set(PAD_LIGHT_MAPPINGS) == set(PadLight)

    def test_cabinet_table_covers_every_light(self):
        assert set(CABINET_LIGHT_MAPPINGS) == set(CabinetLight)

    @pytest.mark.parametrize("table", [PAD_LIGHT_MAPPINGS, CABINET_LIGHT_MAPPINGS])
    def test_pairs_are_distinct(self, table):
        pairs = list(table.values())
        assert len(set(pairs)) == len(pairs)

    @pytest.mark.parametrize("table", [PAD_LIGHT_MAPPINGS, CABINET_LIGHT_MAPPINGS])
    def test_masks_are_single_bits(self, table):
        for mapping in table.values():
            assert 0x01 <= mapping.mask <= 0x80
            assert mapping.mask & (mapping.mask - 1) == 0

    @pytest.mark.parametrize("table", [PAD_LIGHT_MAPPINGS, CABINET_LIGHT_MAPPINGS])
    def test_indices_in_report(self, table):
        for mapping in table.values():
            assert 0 <= mapping.index < LIGHTS_REPORT_SIZE

    def test_pad_layout(self):
        assert PAD_LIGHT_MAPPINGS[PadLight.P1_UP] == LightMapping(2, 0x01)
        assert PAD_LIGHT_MAPPINGS[PadLight.P1_RIGHT] == LightMapping(2, 0x08)
        assert PAD_LIGHT_MAPPINGS[PadLight.P2_UP] == LightMapping(3, 0x01)
        assert PAD_LIGHT_MAPPINGS[PadLight.P2_RIGHT] == LightMapping(3, 0x08)

    def test_cabinet_layout(self):
        assert CABINET_LIGHT_MAPPINGS[CabinetLight.MENU_LEFT] == LightMapping(1, 0x04)
        assert CABINET_LIGHT_MAPPINGS[CabinetLight.MENU_RIGHT] == LightMapping(1, 0x08)
        assert CABINET_LIGHT_MAPPINGS[CabinetLight.MARQUEE_BR] == LightMapping(1, 0x10)
        assert CABINET_LIGHT_MAPPINGS[CabinetLight.MARQUEE_TR] == LightMapping(1, 0x20)
        assert CABINET_LIGHT_MAPPINGS[CabinetLight.MARQUEE_BL] == LightMapping(1, 0x40)
        assert CABINET_LIGHT_MAPPINGS[CabinetLight.MARQUEE_TL] == LightMapping(1, 0x80)
        assert CABINET_LIGHT_MAPPINGS[CabinetLight.BASS_LIGHTS] == LightMapping(4, 0x01)

    def test_keep_alive_bits_not_mapped(self):
        """Bit 0x10 of bytes 2, 3 and 6 belongs to no light."""
        mapped = set(PAD_LIGHT_MAPPINGS.values()) | set(CABINET_LIGHT_MAPPINGS.values())
        for index in (2, 3, 6):
            assert LightMapping(index, 0x10) not in mapped


# =========================================================================
# Input table
# =========================================================================

class TestInputMappings:
    """Keyfield bit offsets."""

    def test_table_covers_every_input(self):
        assert set(INPUT_OFFSETS) == set(Input)

    def test_offsets_distinct(self):
        assert len(set(INPUT_OFFSETS.values())) == 14

    def test_offsets_in_range(self):
        assert all(24 <= off <= 39 for off in INPUT_OFFSETS.values())

    def test_player_parity(self):
        """Even offsets are player 1, odd offsets player 2."""
        for inp, off in INPUT_OFFSETS.items():
            if inp.name.startswith("P1_"):
                assert off % 2 == 0, inp
            else:
                assert off % 2 == 1, inp

    def test_players_pair_up(self):
        """Each P2 input sits one bit above its P1 counterpart."""
        for inp in Input:
            if inp.name.startswith("P1_"):
                twin = Input[inp.name.replace("P1_", "P2_")]
                assert INPUT_OFFSETS[twin] == INPUT_OFFSETS[inp] + 1

    def test_known_offsets(self):
        assert INPUT_OFFSETS[Input.P1_MENU_SELECT] == 24
        assert INPUT_OFFSETS[Input.P1_UP] == 26
        assert INPUT_OFFSETS[Input.P2_RIGHT] == 33
        assert INPUT_OFFSETS[Input.P2_MENU_RIGHT] == 39

    def test_input_mask(self):
        assert input_mask(Input.P1_UP) == 1 << 26

    def test_input_mask_rejects_unknown(self):
        with pytest.raises(ValueError):
            input_mask(99)

    def test_input_mask_rejects_other_enum(self):
        with pytest.raises(ValueError):
            input_mask(PadLight.P1_UP)

    def test_as_member_accepts_plain_int(self):
        assert as_member(PadLight, 6) is PadLight.P2_LEFT
        assert as_member(CabinetLight, CabinetLight.MARQUEE_TL) is CabinetLight.MARQUEE_TL


class TestInputToPadLight:

    def test_only_panel_inputs(self):
        assert len(INPUT_TO_PAD_LIGHT) == 8
        assert set(INPUT_TO_PAD_LIGHT.values()) == set(PadLight)

    def test_names_match(self):
        for inp, light in INPUT_TO_PAD_LIGHT.items():
            assert inp.name == light.name
