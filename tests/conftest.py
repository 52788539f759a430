"""Shared fixtures: a small Angular-style project on disk."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

APP_ROUTING = textwrap.dedent("""\
    import { NgModule } from '@angular/core';
    import { RouterModule, Routes } from '@angular/router';

    const routes: Routes = [
      { path: '', redirectTo: 'dashboard', pathMatch: 'full' },
      { path: 'dashboard', component: DashboardComponent },
      {
        path: 'admin',
        loadChildren: () => import('./admin/admin.module').then(m => m.AdminModule),
      },
      { path: 'Login', component: LoginComponent },
      { path: 'legacy', loadChildren: './legacy/legacy.module#LegacyModule' },
      {
        path: 'missing',
        loadChildren: () => import('./missing/missing.module').then(m => m.MissingModule),
      },
      // { path: 'commented-out', component: OldComponent },
      { path: '**', component: NotFoundComponent },
    ];

    @NgModule({
      imports: [RouterModule.forRoot(routes, { useHash: true })],
      exports: [RouterModule],
    })
    export class AppRoutingModule {}
""")

ADMIN_ROUTING = textwrap.dedent("""\
    const routes: Routes = [
      { path: 'users', component: UsersComponent },
      { path: 'users/:id', component: UserDetailComponent },
      {
        path: 'settings',
        component: SettingsShellComponent,
        children: [
          { path: 'Profile', component: ProfileComponent },
        ],
      },
    ];
""")

LEGACY_ROUTING = textwrap.dedent("""\
    const routes: Routes = [{ path: 'reports', component: ReportsComponent }];
""")

DASHBOARD_HTML = textwrap.dedent("""\
    <a routerLink="/reports/{{id}}">Report</a>
    <a routerLink="/dashboard">Home</a>
    <a [routerLink]="'/admin/users'">Users</a>
    <a [routerLink]="['/help', 'faq']">Help</a>
    <a [routerLink]="item.link">Dynamic</a>
    <a routerLink="/#/about" routerLinkActive="active">About</a>
""")

DASHBOARD_TS = textwrap.dedent("""\
    export class DashboardComponent {
      constructor(private router: Router) {}

      open(id: string) {
        this.router.navigate(['settings', 'profile']);
        this.router.navigateByUrl('/AKIMaintenance/overview');
        this.router.navigateByUrl(`/reports/${id}`);
        this.router.navigate(['/null-view']);
      }
    }
""")

DASHBOARD_SPEC_TS = textwrap.dedent("""\
    it('navigates', () => {
      router.navigate(['spec-only']);
    });
""")

def _write(root: Path, rel: str, text: str) -> Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture()
def angular_app(tmp_path: Path) -> Path:
    """Create a minimal Angular project with lazy modules, templates and calls."""
    root = tmp_path / "project"
    _write(root, "src/app/app-routing.module.ts", APP_ROUTING)
    _write(root, "src/app/admin/admin-routing.module.ts", ADMIN_ROUTING)
    _write(root, "src/app/legacy/legacy-routing.module.ts", LEGACY_ROUTING)
    _write(root, "src/app/dashboard/dashboard.component.html", DASHBOARD_HTML)
    _write(root, "src/app/dashboard/dashboard.component.ts", DASHBOARD_TS)
    _write(root, "src/app/dashboard/dashboard.component.spec.ts", DASHBOARD_SPEC_TS)
    # Dependency trees are never scanned.
    _write(root, "src/app/node_modules/pkg/widget.html", '<a routerLink="/ignored">x</a>\n')
    _write(root, "src/app/dist/bundle.ts", "router.navigateByUrl('/ignored-too');\n")
    return root


@pytest.fixture()
def write_file(tmp_path: Path):
    """Return a helper that writes ``rel`` under *tmp_path* and returns its path."""

    def _factory(rel: str, text: str) -> Path:
        return _write(tmp_path, rel, textwrap.dedent(text))

    return _factory
