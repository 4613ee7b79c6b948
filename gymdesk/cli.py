"""GymDesk CLI tool (gymctl)."""

import typer

app = typer.Typer(name="gymctl", help="GymDesk CLI")
db_app = typer.Typer(help="Database management commands")
roles_app = typer.Typer(help="Role vocabulary commands")
app.add_typer(db_app, name="db")
app.add_typer(roles_app, name="roles")


@db_app.command("create-tables")
def db_create_tables():
    """Create every table that does not exist yet."""
    from gymdesk.db.base import Base
    from gymdesk.db.session import engine
    import gymdesk.models  # noqa: F401  registers the mappers

    Base.metadata.create_all(bind=engine)
    typer.echo(f"✅ Tables ready on {engine.url.render_as_string(hide_password=True)}")


@db_app.command("seed")
def db_seed():
    """Seed lookups, roles, permissions and the super-admin."""
    from gymdesk.db.session import SessionLocal
    from gymdesk.db.seeds.seed_defaults import seed_defaults
    from gymdesk.db.seeds.seed_super_admin import seed_super_admin

    db = SessionLocal()
    try:
        created = seed_defaults(db)
        for name, count in created.items():
            typer.echo(f"  {name}: {count} created")
        admin, created_admin = seed_super_admin(db)
        admin_email = admin.email if admin else None
    finally:
        db.close()

    if admin_email is None:
        typer.echo("⚠️  Superadmin role missing, account not created", err=True)
        raise typer.Exit(code=1)
    if created_admin:
        typer.echo(f"✅ Created superadmin {admin_email}")
    else:
        typer.echo(f"ℹ️  Superadmin {admin_email} already exists")
    typer.echo("✅ All seeds applied")


@roles_app.command("rename")
def roles_rename(
    old_code: str = typer.Argument(..., help="Current role code, e.g. member"),
    new_code: str = typer.Argument(..., help="New role code, e.g. client"),
    label: str = typer.Option(None, "--label", help="Display name for the renamed role"),
):
    """Rename a role code across lookups, roles and permission grants."""
    from gymdesk.db.session import SessionLocal
    from gymdesk.db.migrations.rename_role import rename_role_code
    from gymdesk.core.exceptions import GymDeskError

    db = SessionLocal()
    try:
        report = rename_role_code(db, old_code, new_code, label)
    except GymDeskError as e:
        typer.echo(f"❌ Rename failed, nothing was changed: {e.message}", err=True)
        raise typer.Exit(code=1)
    finally:
        db.close()

    if report.already_renamed:
        typer.echo(f"ℹ️  Lookup '{report.new_code}' already present, skipping lookup rename.")
    elif report.lookup_renamed:
        typer.echo(f"✅ Renamed lookup '{report.old_code}' -> '{report.new_code}'")
    if report.role_renamed:
        typer.echo(f"✅ Renamed role {report.old_code.upper()} -> {report.new_code.upper()}")

    typer.echo(
        f"  grants on '{report.old_code}': {report.old_xref_before} -> {report.old_xref_after}"
    )
    typer.echo(
        f"  grants on '{report.new_code}': {report.new_xref_before} -> {report.new_xref_after}"
        f" (merged {report.xref_merged})"
    )
    typer.echo(f"  users with role '{report.new_code}': {report.users_with_new_role}")

    if not report.verified:
        typer.echo("⚠️  Verification failed: grant counts do not add up", err=True)
        raise typer.Exit(code=1)
    typer.echo("✅ Verified")


@app.command("serve")
def serve(
    host: str = typer.Option("0.0.0.0", help="Host"),
    port: int = typer.Option(8000, help="Port"),
    reload: bool = typer.Option(True, help="Auto-reload"),
):
    """Start the FastAPI development server."""
    import uvicorn
    uvicorn.run("gymdesk.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
