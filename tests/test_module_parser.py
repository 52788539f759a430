"""Tests for the routing-module parser and the per-run parse cache."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from route_audit.analyzers.module_parser import (
    ModuleParseCache,
    RoutingModuleParseError,
    parse_routing_module,
    strip_comments,
    uses_hash_routing,
)


class TestParseRoutingModule:
    def test_declarations_in_source_order(self):
        text = textwrap.dedent("""\
            const routes: Routes = [
              { path: 'dashboard', component: DashboardComponent },
              { path: 'reports', component: ReportsComponent },
              { path: '', redirectTo: 'dashboard', pathMatch: 'full' },
            ];
        """)
        decls = parse_routing_module(text)
        assert [d.path for d in decls] == ["dashboard", "reports", ""]
        assert all(d.load_children is None for d in decls)
        assert [d.line for d in decls] == [2, 3, 4]

    def test_dynamic_import_load_children(self):
        text = textwrap.dedent("""\
            const routes: Routes = [
              {
                path: 'admin',
                loadChildren: () => import('./admin/admin.module').then(m => m.AdminModule),
                canActivate: [AuthGuard],
              },
            ];
        """)
        (decl,) = parse_routing_module(text)
        assert decl.path == "admin"
        assert decl.load_children == "./admin/admin.module"
        assert decl.is_lazy

    def test_legacy_string_load_children_drops_symbol(self):
        text = "[{ path: 'legacy', loadChildren: './legacy/legacy.module#LegacyModule' }]"
        (decl,) = parse_routing_module(text)
        assert decl.load_children == "./legacy/legacy.module"

    def test_load_children_without_static_import_is_not_lazy(self):
        text = "[{ path: 'x', loadChildren: resolveModule }]"
        (decl,) = parse_routing_module(text)
        assert decl.load_children is None

    def test_path_of_sibling_object_is_not_borrowed(self):
        # The second object has no path of its own.
        text = "[{ path: 'a', component: A }, { component: B, data: { title: 'b' } }]"
        decls = parse_routing_module(text)
        assert [d.path for d in decls] == ["a"]

    def test_inline_children_become_nested_declarations(self):
        text = textwrap.dedent("""\
            const routes: Routes = [
              {
                path: 'settings',
                component: ShellComponent,
                children: [
                  { path: 'profile', component: ProfileComponent },
                  { path: 'security', component: SecurityComponent },
                ],
              },
            ];
        """)
        (decl,) = parse_routing_module(text)
        assert decl.path == "settings"
        assert [c.path for c in decl.children] == ["profile", "security"]

    def test_nested_data_path_does_not_shadow_route_path(self):
        text = "[{ data: { path: 'nope' }, path: 'real' }]"
        (decl,) = parse_routing_module(text)
        assert decl.path == "real"

    def test_commented_out_routes_are_ignored(self):
        text = textwrap.dedent("""\
            const routes: Routes = [
              // { path: 'old', component: OldComponent },
              /* { path: 'older', component: OlderComponent }, */
              { path: 'current', component: CurrentComponent },
            ];
        """)
        assert [d.path for d in parse_routing_module(text)] == ["current"]

    def test_url_in_string_is_not_a_comment(self):
        text = "[{ path: 'docs', data: { href: 'https://example.com/x' } }]"
        assert [d.path for d in parse_routing_module(text)] == ["docs"]

    def test_double_quoted_paths(self):
        text = '[{ "path": "reports/daily", component: DailyComponent }]'
        assert [d.path for d in parse_routing_module(text)] == ["reports/daily"]

    def test_no_routes_yields_empty_list(self):
        assert parse_routing_module("export class EmptyModule {}\n") == []

    def test_unbalanced_brackets_raise_with_location(self):
        text = "const routes = [\n  { path: 'a' ,\n];\n"
        with pytest.raises(RoutingModuleParseError) as exc:
            parse_routing_module(text, "src/app/broken-routing.module.ts")
        assert exc.value.source_file == Path("src/app/broken-routing.module.ts")
        assert exc.value.line == 3

    def test_regex_literal_with_bracket_in_guard(self):
        text = textwrap.dedent("""\
            const routes: Routes = [
              { path: 'a', component: A, canMatch: [() => /^[\\]]+$/.test(x)] },
            ];
        """)
        assert [d.path for d in parse_routing_module(text)] == ["a"]

    def test_regex_literal_with_quotes_does_not_open_string(self):
        text = textwrap.dedent("""\
            const routes: Routes = [
              { path: 'b', canActivate: [() => /['"]/.test(y)] },
              { path: 'c', data: { re: /[}]/g } },
              { path: 'd', matcher: (s) => { return /\\{/.test(s) ? null : null; } },
            ];
        """)
        assert [d.path for d in parse_routing_module(text)] == ["b", "c", "d"]

    def test_division_is_not_a_regex(self):
        text = "[{ path: 'e', data: { ratio: 4 / 2, half: total / 2 } }, { path: 'f' }]"
        assert [d.path for d in parse_routing_module(text)] == ["e", "f"]

    def test_unclosed_bracket_raises(self):
        with pytest.raises(RoutingModuleParseError, match="unclosed"):
            parse_routing_module("const routes = [{ path: 'a' }")


class TestStripComments:
    def test_offsets_and_newlines_preserved(self):
        text = "a // note\nb /* x\ny */ c"
        clean = strip_comments(text)
        assert len(clean) == len(text)
        assert clean.count("\n") == text.count("\n")
        assert "note" not in clean and "y */" not in clean
        assert clean.startswith("a ") and clean.rstrip().endswith("c")

    def test_slashes_inside_regex_are_not_a_comment(self):
        clean = strip_comments("x = /\\/\\/kept/; // dropped")
        assert "kept" in clean
        assert "dropped" not in clean


class TestUsesHashRouting:
    @pytest.mark.parametrize(
        "text",
        [
            "RouterModule.forRoot(routes, { useHash: true })",
            "provideRouter(routes, withHashLocation())",
        ],
    )
    def test_detected(self, text):
        assert uses_hash_routing(text)

    @pytest.mark.parametrize(
        "text",
        [
            "RouterModule.forRoot(routes)",
            "RouterModule.forRoot(routes, { useHash: false })",
            "// RouterModule.forRoot(routes, { useHash: true })",
        ],
    )
    def test_not_detected(self, text):
        assert not uses_hash_routing(text)


class TestModuleParseCache:
    def test_each_file_read_once(self, tmp_path: Path):
        f = tmp_path / "shared-routing.module.ts"
        f.write_text("[{ path: 'page' }]", encoding="utf-8")
        cache = ModuleParseCache()

        first = cache.get(f)
        second = cache.get(tmp_path / "." / "shared-routing.module.ts")

        assert first is second
        assert cache.reads == 1
        assert f in cache
        assert len(cache) == 1

    def test_invalid_utf8_is_fatal(self, tmp_path: Path):
        f = tmp_path / "bad-routing.module.ts"
        f.write_bytes(b"[{ path: '\xff' }]")
        with pytest.raises(UnicodeDecodeError):
            ModuleParseCache().get(f)

    def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            ModuleParseCache().get(tmp_path / "nope-routing.module.ts")
