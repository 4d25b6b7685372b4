"""Tests for the module transform.

Tests cover:
- element rewriting (self-closing, paired, aliased, existing iconId)
- import pruning and shared component import insertion
- proxy components resolving to the icon passed in their prop
- modules left untouched (no usage, type-only, namespace, parse errors)
- registration order and repetition
- idempotence and source maps
"""

import re

import pytest
from iconsprite.core.transform import source_matches, transform_module


# =========================================================================
# Sample module fixtures
# =========================================================================

SINGLE_ICON = '''import { BiAlarm } from 'react-icons/bi';
export const C = () => <BiAlarm />;
'''

SINGLE_ICON_EXPECTED = '''import { ReactIconsSpriteIcon } from "react-icons-sprite";
export const C = () => <ReactIconsSpriteIcon iconId="ri-react-icons-bi-BiAlarm" />;
'''

TOOLBAR = '''import React from 'react';
import { BiAlarm as Alarm } from 'react-icons/bi';
import { Camera } from 'lucide-react';

export function Toolbar() {
  return (
    <div>
      <Alarm size={16} />
      <Camera></Camera>
    </div>
  );
}
'''

TOOLBAR_EXPECTED = '''import React from 'react';
import { ReactIconsSpriteIcon } from "react-icons-sprite";

export function Toolbar() {
  return (
    <div>
      <ReactIconsSpriteIcon iconId="ri-react-icons-bi-BiAlarm" size={16} />
      <ReactIconsSpriteIcon iconId="ri-lucide-react-Camera"></ReactIconsSpriteIcon>
    </div>
  );
}
'''

EXISTING_COMPONENT_IMPORT = '''import { ReactIconsSpriteIcon as Sprite } from 'react-icons-sprite';
import { BiAlarm } from 'react-icons/bi';
export const C = () => <BiAlarm />;
'''

EXISTING_COMPONENT_EXPECTED = '''import { ReactIconsSpriteIcon as Sprite } from 'react-icons-sprite';
export const C = () => <Sprite iconId="ri-react-icons-bi-BiAlarm" />;
'''

PARTIAL_USE = '''import { BiAlarm, BiAdjust } from 'react-icons/bi';
export const C = () => <BiAlarm />;
export const Other = BiAdjust;
'''

PARTIAL_USE_EXPECTED = '''import { BiAdjust } from 'react-icons/bi';
import { ReactIconsSpriteIcon } from "react-icons-sprite";
export const C = () => <ReactIconsSpriteIcon iconId="ri-react-icons-bi-BiAlarm" />;
export const Other = BiAdjust;
'''

STILL_REFERENCED = '''import { BiAlarm } from 'react-icons/bi';
export const C = () => <BiAlarm />;
export const icons = [BiAlarm];
'''

SHORTHAND_REFERENCED = '''import { BiAlarm } from 'react-icons/bi';
export const C = () => <BiAlarm />;
export const icons = { BiAlarm };
'''

TYPE_SPECIFIER = '''import { type IconType, BiAlarm } from 'react-icons/bi';
export const C = () => <BiAlarm />;
'''

TYPE_SPECIFIER_EXPECTED = '''import { type IconType } from 'react-icons/bi';
import { ReactIconsSpriteIcon } from "react-icons-sprite";
export const C = () => <ReactIconsSpriteIcon iconId="ri-react-icons-bi-BiAlarm" />;
'''

MULTILINE_CLAUSE = '''import {
  BiAlarm, // bell
  BiAdjust, // sliders
} from 'react-icons/bi';
export const C = () => <BiAlarm />;
export const Other = BiAdjust;
'''

MULTILINE_CLAUSE_EXPECTED = '''import {
  BiAdjust, // sliders
} from 'react-icons/bi';
import { ReactIconsSpriteIcon } from "react-icons-sprite";
export const C = () => <ReactIconsSpriteIcon iconId="ri-react-icons-bi-BiAlarm" />;
export const Other = BiAdjust;
'''

MULTILINE_TRAILING = '''import {
  BiAdjust, // sliders
  BiAlarm,
} from 'react-icons/bi';
export const C = () => <BiAlarm />;
export const Other = BiAdjust;
'''

MULTILINE_TRAILING_EXPECTED = '''import {
  BiAdjust, // sliders
} from 'react-icons/bi';
import { ReactIconsSpriteIcon } from "react-icons-sprite";
export const C = () => <ReactIconsSpriteIcon iconId="ri-react-icons-bi-BiAlarm" />;
export const Other = BiAdjust;
'''

DEFAULT_AND_NAMED = '''import Icons, { Alarm } from '@mui/icons-material';
export const A = () => <Alarm />;
export const all = Icons;
'''

DEFAULT_AND_NAMED_EXPECTED = '''import Icons from '@mui/icons-material';
import { ReactIconsSpriteIcon } from "react-icons-sprite";
export const A = () => <ReactIconsSpriteIcon iconId="ri-mui-icons-material-Alarm" />;
export const all = Icons;
'''

COMMENTED_FIRST_IMPORT = '''import React from 'react'; // react
import { BiAlarm } from 'react-icons/bi';
export const C = () => <BiAlarm />;
'''

COMMENTED_FIRST_IMPORT_EXPECTED = '''import React from 'react'; // react
import { ReactIconsSpriteIcon } from "react-icons-sprite";
export const C = () => <ReactIconsSpriteIcon iconId="ri-react-icons-bi-BiAlarm" />;
'''

TYPE_ONLY_IMPORT = '''import type { BiAlarm } from 'react-icons/bi';
export const C = () => <div />;
'''

NAMESPACE_IMPORT = '''import * as Bi from 'react-icons/bi';
export const C = () => <Bi.BiAlarm />;
'''

UNUSED_IMPORT = '''import { BiAlarm } from 'react-icons/bi';
export const C = () => <div>no icons here</div>;
'''

UNRECOGNIZED_LIBRARY = '''import { Star } from './local-icons';
export const C = () => <Star />;
'''

MUI_DEFAULT = '''import AlarmIcon from '@mui/icons-material/Alarm';
export const A = () => <AlarmIcon fontSize="small" />;
'''

MUI_DEFAULT_EXPECTED = '''import { ReactIconsSpriteIcon } from "react-icons-sprite";
export const A = () => <ReactIconsSpriteIcon iconId="ri-mui-icons-material-Alarm-default" fontSize="small" />;
'''

EXPLICIT_ICON_ID = '''import { BiAlarm } from 'react-icons/bi';
export const C = () => <BiAlarm iconId="custom" />;
'''

REPEATED_USE = '''import { BiAlarm } from 'react-icons/bi';
export const C = () => (
  <p>
    <BiAlarm />
    <BiAlarm />
  </p>
);
'''

FONTAWESOME_PROXY = '''import { FontAwesomeIcon } from '@fortawesome/react-fontawesome';
import { faCoffee } from '@fortawesome/free-solid-svg-icons';
export const C = () => <FontAwesomeIcon icon={faCoffee} className="fa-lg" />;
'''

FONTAWESOME_PROXY_EXPECTED = '''import { ReactIconsSpriteIcon } from "react-icons-sprite";
export const C = () => <ReactIconsSpriteIcon iconId="ri-fortawesome-free-solid-svg-icons-faCoffee" className="fa-lg" />;
'''

FONTAWESOME_LITERAL = '''import { FontAwesomeIcon } from '@fortawesome/react-fontawesome';
export const C = () => <FontAwesomeIcon icon="coffee" />;
'''

FONTAWESOME_LITERAL_EXPECTED = '''import { ReactIconsSpriteIcon } from "react-icons-sprite";
export const C = () => <ReactIconsSpriteIcon iconId="ri-fortawesome-react-fontawesome-FontAwesomeIcon" icon="coffee" />;
'''

FONTAWESOME_ARRAY = '''import { FontAwesomeIcon } from '@fortawesome/react-fontawesome';
export const C = () => <FontAwesomeIcon icon={['fas', 'coffee']} />;
'''

FONTAWESOME_UNTRACKED = '''import { FontAwesomeIcon } from '@fortawesome/react-fontawesome';
const coffee = lookup('coffee');
export const C = () => <FontAwesomeIcon icon={coffee} />;
'''

BROKEN = '''import { BiAlarm } from 'react-icons/bi';
export const C = () => <BiAlarm
'''


class Recorder:
    """Collects register(library_id, export_name) calls."""

    def __init__(self):
        self.calls = []

    def __call__(self, library_id, export_name):
        self.calls.append((library_id, export_name))


@pytest.fixture
def register():
    return Recorder()


# =========================================================================
# Tests: Element rewriting
# =========================================================================

class TestElementRewriting:
    def test_single_icon(self, register):
        result = transform_module(SINGLE_ICON, "C.tsx", register)
        assert result.any_rewrite
        assert result.code == SINGLE_ICON_EXPECTED
        assert register.calls == [("react-icons/bi", "BiAlarm")]

    def test_alias_and_paired_tags(self, register):
        result = transform_module(TOOLBAR, "Toolbar.tsx", register)
        assert result.code == TOOLBAR_EXPECTED
        assert register.calls == [("react-icons/bi", "BiAlarm"), ("lucide-react", "Camera")]

    def test_existing_icon_id_is_kept(self, register):
        result = transform_module(EXPLICIT_ICON_ID, "C.tsx", register)
        assert '<ReactIconsSpriteIcon iconId="custom" />' in result.code
        assert result.code.count("iconId=") == 1
        assert register.calls == [("react-icons/bi", "BiAlarm")]

    def test_repeated_use_registers_each_element(self, register):
        result = transform_module(REPEATED_USE, "C.tsx", register)
        assert result.code.count('<ReactIconsSpriteIcon iconId="ri-react-icons-bi-BiAlarm" />') == 2
        assert register.calls == [("react-icons/bi", "BiAlarm")] * 2

    def test_default_import(self, register):
        result = transform_module(MUI_DEFAULT, "A.tsx", register)
        assert result.code == MUI_DEFAULT_EXPECTED
        assert register.calls == [("@mui/icons-material/Alarm", "default")]

    def test_javascript_module(self, register):
        result = transform_module(SINGLE_ICON, "C.jsx", register)
        assert result.code == SINGLE_ICON_EXPECTED

    def test_custom_sources(self, register):
        code = "import { Star } from '@acme/icons';\nexport const S = () => <Star />;\n"
        result = transform_module(code, "S.tsx", register, sources=[re.compile(r"^@acme/icons$")])
        assert '<ReactIconsSpriteIcon iconId="ri-acme-icons-Star" />' in result.code
        assert register.calls == [("@acme/icons", "Star")]

    def test_inline_component_with_custom_pack(self, register):
        code = "import { BiAlarm } from 'icon-pack/bi'; const C = () => <BiAlarm/>;"
        result = transform_module(code, "C.tsx", register, sources=[re.compile(r"^icon-pack/")])
        assert result.code == (
            'import { ReactIconsSpriteIcon } from "react-icons-sprite"; '
            'const C = () => <ReactIconsSpriteIcon iconId="ri-icon-pack-bi-BiAlarm"/>;'
        )
        assert register.calls == [("icon-pack/bi", "BiAlarm")]

    def test_custom_sources_replace_defaults(self, register):
        result = transform_module(SINGLE_ICON, "C.tsx", register, sources=[re.compile(r"^@acme/icons$")])
        assert not result.any_rewrite
        assert result.code == SINGLE_ICON


# =========================================================================
# Tests: Import pruning
# =========================================================================

class TestImportPruning:
    def test_existing_component_import_reused(self, register):
        result = transform_module(EXISTING_COMPONENT_IMPORT, "C.tsx", register)
        assert result.code == EXISTING_COMPONENT_EXPECTED
        assert result.code.count("react-icons-sprite") == 1

    def test_partial_clause_kept(self, register):
        result = transform_module(PARTIAL_USE, "C.tsx", register)
        assert result.code == PARTIAL_USE_EXPECTED

    def test_type_specifier_kept(self, register):
        result = transform_module(TYPE_SPECIFIER, "C.tsx", register)
        assert result.code == TYPE_SPECIFIER_EXPECTED

    def test_multiline_clause_keeps_layout_and_comments(self, register):
        result = transform_module(MULTILINE_CLAUSE, "C.tsx", register)
        assert result.code == MULTILINE_CLAUSE_EXPECTED

    def test_trailing_specifier_removed_with_its_comma(self, register):
        result = transform_module(MULTILINE_TRAILING, "C.tsx", register)
        assert result.code == MULTILINE_TRAILING_EXPECTED

    def test_default_binding_survives_named_removal(self, register):
        result = transform_module(DEFAULT_AND_NAMED, "A.tsx", register)
        assert result.code == DEFAULT_AND_NAMED_EXPECTED

    def test_named_binding_survives_default_removal(self, register):
        code = (
            "import Icons, { Alarm } from '@mui/icons-material';\n"
            "export const A = () => <Icons />;\n"
            "export const alarm = Alarm;\n"
        )
        result = transform_module(code, "A.tsx", register)
        assert result.code.startswith("import { Alarm } from '@mui/icons-material';\n")
        assert register.calls == [("@mui/icons-material", "default")]

    def test_insert_after_trailing_comment(self, register):
        result = transform_module(COMMENTED_FIRST_IMPORT, "C.tsx", register)
        assert result.code == COMMENTED_FIRST_IMPORT_EXPECTED

    def test_insert_before_code_sharing_the_line(self, register):
        code = "import React from 'react'; const n = 1;\nimport { BiAlarm } from 'react-icons/bi';\nexport const C = () => <BiAlarm />;\n"
        result = transform_module(code, "C.tsx", register)
        assert result.code.startswith(
            "import React from 'react';\n"
            'import { ReactIconsSpriteIcon } from "react-icons-sprite"; const n = 1;\n'
        )

    def test_still_referenced_binding_kept(self, register):
        result = transform_module(STILL_REFERENCED, "C.tsx", register)
        assert result.any_rewrite
        assert "import { BiAlarm } from 'react-icons/bi';" in result.code
        assert '<ReactIconsSpriteIcon iconId="ri-react-icons-bi-BiAlarm" />' in result.code
        assert "export const icons = [BiAlarm];" in result.code

    def test_shorthand_property_counts_as_reference(self, register):
        result = transform_module(SHORTHAND_REFERENCED, "C.tsx", register)
        assert "import { BiAlarm } from 'react-icons/bi';" in result.code

    def test_component_imported_once(self, register):
        result = transform_module(TOOLBAR, "Toolbar.tsx", register)
        assert result.code.count('from "react-icons-sprite"') == 1
        assert "react-icons/bi" not in result.code
        assert "lucide-react'" not in result.code


# =========================================================================
# Tests: Proxy components
# =========================================================================

class TestProxyComponents:
    def test_identifier_prop_resolves_icon(self, register):
        result = transform_module(FONTAWESOME_PROXY, "C.tsx", register)
        assert result.code == FONTAWESOME_PROXY_EXPECTED
        assert register.calls == [("@fortawesome/free-solid-svg-icons", "faCoffee")]

    def test_string_prop_keeps_component_identity(self, register):
        result = transform_module(FONTAWESOME_LITERAL, "C.tsx", register)
        assert result.code == FONTAWESOME_LITERAL_EXPECTED
        assert register.calls == [("@fortawesome/react-fontawesome", "FontAwesomeIcon")]

    def test_array_prop_keeps_component_identity(self, register):
        result = transform_module(FONTAWESOME_ARRAY, "C.tsx", register)
        assert "icon={['fas', 'coffee']}" in result.code
        assert register.calls == [("@fortawesome/react-fontawesome", "FontAwesomeIcon")]

    def test_untracked_identifier_keeps_component_identity(self, register):
        result = transform_module(FONTAWESOME_UNTRACKED, "C.tsx", register)
        assert "icon={coffee}" in result.code
        assert 'iconId="ri-fortawesome-react-fontawesome-FontAwesomeIcon"' in result.code
        assert register.calls == [("@fortawesome/react-fontawesome", "FontAwesomeIcon")]


# =========================================================================
# Tests: Untouched modules
# =========================================================================

class TestUntouchedModules:
    @pytest.mark.parametrize(
        "code",
        [TYPE_ONLY_IMPORT, NAMESPACE_IMPORT, UNUSED_IMPORT, UNRECOGNIZED_LIBRARY],
        ids=["type-only", "namespace", "unused", "unrecognized"],
    )
    def test_returned_unchanged(self, code, register):
        result = transform_module(code, "C.tsx", register)
        assert not result.any_rewrite
        assert result.code == code
        assert result.map is None
        assert register.calls == []

    def test_typescript_without_jsx(self, register):
        code = "import { BiAlarm } from 'react-icons/bi';\nexport const icon = BiAlarm;\n"
        result = transform_module(code, "icons.ts", register)
        assert not result.any_rewrite
        assert result.code == code

    def test_parse_error(self, register):
        result = transform_module(BROKEN, "Broken.tsx", register)
        assert not result.any_rewrite
        assert result.code == BROKEN
        assert result.map is None
        assert result.errors
        assert result.errors[0].file_path == "Broken.tsx"
        assert register.calls == []


# =========================================================================
# Tests: Idempotence and source maps
# =========================================================================

class TestOutput:
    @pytest.mark.parametrize("code", [SINGLE_ICON, TOOLBAR, FONTAWESOME_PROXY, PARTIAL_USE])
    def test_idempotent(self, code, register):
        first = transform_module(code, "C.tsx", register)
        again = Recorder()
        second = transform_module(first.code, "C.tsx", again)
        assert not second.any_rewrite
        assert second.code == first.code
        assert again.calls == []

    def test_source_map_shape(self, register):
        result = transform_module(TOOLBAR, "src/Toolbar.tsx", register)
        source_map = result.map.to_dict()
        assert source_map["version"] == 3
        assert source_map["sources"] == ["src/Toolbar.tsx"]
        assert source_map["sourcesContent"] == [TOOLBAR]
        assert source_map["mappings"].startswith("AAAA")
        # One group per generated line
        assert source_map["mappings"].count(";") == result.code.count("\n")

    def test_source_map_json(self, register):
        result = transform_module(SINGLE_ICON, "C.tsx", register)
        assert '"version": 3' in result.map.to_json()


# =========================================================================
# Tests: Recognized library sources
# =========================================================================

class TestDefaultSources:
    @pytest.mark.parametrize(
        "source",
        [
            "react-icons/bi",
            "react-icons/io5",
            "lucide-react",
            "@radix-ui/react-icons",
            "@heroicons/react/24/outline",
            "@tabler/icons-react",
            "phosphor-react",
            "@phosphor-icons/react",
            "react-feather",
            "react-bootstrap-icons",
            "grommet-icons",
            "remixicon-react",
            "@remixicon/react",
            "devicons-react",
            "typicons-react",
            "boxicons-react",
            "@fortawesome/free-solid-svg-icons",
            "@fortawesome/pro-light-svg-icons",
            "@fortawesome/react-fontawesome",
            "@mui/icons-material",
            "@mui/icons-material/Alarm",
            "@iconscout/react-unicons",
        ],
    )
    def test_recognized(self, source):
        assert source_matches(source)

    @pytest.mark.parametrize(
        "source",
        ["react", "react-icons", "react-icons-sprite", "./icons", "@mui/material", "lucide-react-native"],
    )
    def test_not_recognized(self, source):
        assert not source_matches(source)
