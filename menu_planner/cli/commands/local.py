"""
Local Store Commands.

Manage dishes, menus and daily plans in the local JSON store, without
a server or a database.
"""

import datetime as dt
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from menu_planner.backend.core.exceptions import ApplicationError
from menu_planner.backend.models.dish import DishType
from menu_planner.backend.schemas.daily_menu import DailyMenuSave
from menu_planner.backend.schemas.dish import DishCreate, DishUpdate
from menu_planner.backend.schemas.i18n import LANGUAGES
from menu_planner.backend.schemas.menu import MenuCreate, MenuUpdate
from menu_planner.backend.services.resolver import to_calendar_day
from menu_planner.backend.storage.local import LocalStore

app = typer.Typer(help="Local JSON store commands", no_args_is_help=True)
dish_app = typer.Typer(help="Dish commands", no_args_is_help=True)
menu_app = typer.Typer(help="Menu commands", no_args_is_help=True)
plan_app = typer.Typer(help="Daily plan commands", no_args_is_help=True)
app.add_typer(dish_app, name="dish")
app.add_typer(menu_app, name="menu")
app.add_typer(plan_app, name="plan")

console = Console()

LanguageOption = typer.Option("en", "--lang", "-l", help=f"Display language ({', '.join(LANGUAGES)})")


@app.callback()
def local(
    ctx: typer.Context,
    directory: Optional[Path] = typer.Option(
        None,
        "--dir",
        help="Store directory (defaults to storage.yaml local_dir)",
    ),
) -> None:
    """
    Local JSON store.

    Each collection is one JSON file: dishes, menus, dailyMenus.
    """
    ctx.obj = LocalStore(directory) if directory else LocalStore.from_config()


def _fail(message: str) -> None:
    console.print(f"[red]Error: {escape(message)}[/red]")
    raise typer.Exit(1)


def _parse_day(value: str) -> dt.date:
    try:
        return to_calendar_day(value)
    except ValueError:
        _fail(f"Invalid date: {value}")


# =============================================================================
# Dishes
# =============================================================================


@dish_app.command("list")
def list_dishes(
    ctx: typer.Context,
    dish_type: Optional[DishType] = typer.Option(None, "--type", "-t", help="Only this course"),
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Search every locale"),
    lang: str = LanguageOption,
) -> None:
    """
    List dishes, newest first.

    Examples:
        cli.py local dish list
        cli.py local dish list --type second --search paella
    """
    store: LocalStore = ctx.obj
    dishes = store.list_dishes(dish_type=dish_type, query=search)

    table = Table(title="Dishes", show_header=True)
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Type")
    table.add_column("Created")
    for dish in dishes:
        table.add_row(
            dish.id,
            getattr(dish.name, lang, dish.name.en),
            dish.type.value,
            dish.created_at.strftime("%Y-%m-%d %H:%M"),
        )
    console.print(table)


@dish_app.command("add")
def add_dish(
    ctx: typer.Context,
    en: str = typer.Option(..., "--en", help="English name"),
    es: str = typer.Option(..., "--es", help="Spanish name"),
    ca: str = typer.Option(..., "--ca", help="Catalan name"),
    dish_type: DishType = typer.Option(..., "--type", "-t", help="Course category"),
) -> None:
    """
    Add a dish.

    Examples:
        cli.py local dish add --en Paella --es Paella --ca Paella --type second
    """
    store: LocalStore = ctx.obj
    try:
        dish = store.create_dish(DishCreate(name={"en": en, "es": es, "ca": ca}, type=dish_type))
    except PydanticValidationError as e:
        _fail(str(e))
    except ApplicationError as e:
        _fail(e.message)
    console.print(f"[green]Dish saved[/green] {dish.id}")


@dish_app.command("edit")
def edit_dish(
    ctx: typer.Context,
    dish_id: str = typer.Argument(..., help="Dish ID"),
    en: Optional[str] = typer.Option(None, "--en", help="English name"),
    es: Optional[str] = typer.Option(None, "--es", help="Spanish name"),
    ca: Optional[str] = typer.Option(None, "--ca", help="Catalan name"),
    dish_type: Optional[DishType] = typer.Option(None, "--type", "-t", help="Course category"),
) -> None:
    """
    Edit a dish in place. Locales that are not given keep their name.

    Examples:
        cli.py local dish edit <dish-id> --es "Arroz negro"
        cli.py local dish edit <dish-id> --type first
    """
    store: LocalStore = ctx.obj
    names = {"en": en, "es": es, "ca": ca}
    try:
        dish = store.get_dish(dish_id)
        renamed = {lang: value for lang, value in names.items() if value is not None}
        update = DishUpdate(
            name=dish.name.model_copy(update=renamed).model_dump() if renamed else None,
            type=dish_type,
        )
        store.update_dish(dish_id, update)
    except PydanticValidationError as e:
        _fail(str(e))
    except ApplicationError as e:
        _fail(e.message)
    console.print(f"[green]Dish updated[/green] {dish_id}")


@dish_app.command("rm")
def remove_dish(
    ctx: typer.Context,
    dish_id: str = typer.Argument(..., help="Dish ID"),
) -> None:
    """
    Delete a dish. Daily plans that use it are kept.
    """
    store: LocalStore = ctx.obj
    try:
        store.delete_dish(dish_id)
    except ApplicationError as e:
        _fail(e.message)
    console.print("[green]Dish deleted[/green]")


# =============================================================================
# Menus
# =============================================================================


@menu_app.command("list")
def list_menus(
    ctx: typer.Context,
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Search names and descriptions"),
    lang: str = LanguageOption,
) -> None:
    """
    List menus, newest first.
    """
    store: LocalStore = ctx.obj
    menus = store.list_menus(query=search)

    table = Table(title="Menus", show_header=True)
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    for menu in menus:
        description = getattr(menu.description, lang, None) if menu.description else None
        table.add_row(menu.id, getattr(menu.name, lang, menu.name.en), description or "-")
    console.print(table)


@menu_app.command("add")
def add_menu(
    ctx: typer.Context,
    en: str = typer.Option(..., "--en", help="English name"),
    es: str = typer.Option(..., "--es", help="Spanish name"),
    ca: str = typer.Option(..., "--ca", help="Catalan name"),
    description_en: Optional[str] = typer.Option(None, "--description-en", help="English description"),
    description_es: Optional[str] = typer.Option(None, "--description-es", help="Spanish description"),
    description_ca: Optional[str] = typer.Option(None, "--description-ca", help="Catalan description"),
) -> None:
    """
    Add a menu.

    Examples:
        cli.py local menu add --en "Weekday" --es "Diario" --ca "Diari"
    """
    store: LocalStore = ctx.obj
    description = {"en": description_en, "es": description_es, "ca": description_ca}
    try:
        menu = store.create_menu(
            MenuCreate(
                name={"en": en, "es": es, "ca": ca},
                description=description if any(description.values()) else None,
            )
        )
    except PydanticValidationError as e:
        _fail(str(e))
    except ApplicationError as e:
        _fail(e.message)
    console.print(f"[green]Menu saved[/green] {menu.id}")


@menu_app.command("edit")
def edit_menu(
    ctx: typer.Context,
    menu_id: str = typer.Argument(..., help="Menu ID"),
    en: Optional[str] = typer.Option(None, "--en", help="English name"),
    es: Optional[str] = typer.Option(None, "--es", help="Spanish name"),
    ca: Optional[str] = typer.Option(None, "--ca", help="Catalan name"),
    description_en: Optional[str] = typer.Option(None, "--description-en", help="English description"),
    description_es: Optional[str] = typer.Option(None, "--description-es", help="Spanish description"),
    description_ca: Optional[str] = typer.Option(None, "--description-ca", help="Catalan description"),
    clear_description: bool = typer.Option(False, "--clear-description", help="Remove the description"),
) -> None:
    """
    Edit a menu in place. Locales that are not given keep their text.

    Examples:
        cli.py local menu edit <menu-id> --ca "Diari d'estiu"
        cli.py local menu edit <menu-id> --clear-description
    """
    store: LocalStore = ctx.obj
    renamed = {lang: value for lang, value in {"en": en, "es": es, "ca": ca}.items() if value is not None}
    described = {
        lang: value
        for lang, value in {"en": description_en, "es": description_es, "ca": description_ca}.items()
        if value is not None
    }
    if clear_description and described:
        _fail("--clear-description cannot be combined with description options")

    try:
        menu = store.get_menu(menu_id)
        changes: dict = {}
        if renamed:
            changes["name"] = menu.name.model_copy(update=renamed).model_dump()
        if clear_description:
            changes["description"] = None
        elif described:
            current = menu.description.model_dump() if menu.description else {}
            changes["description"] = {**current, **described}
        store.update_menu(menu_id, MenuUpdate(**changes))
    except PydanticValidationError as e:
        _fail(str(e))
    except ApplicationError as e:
        _fail(e.message)
    console.print(f"[green]Menu updated[/green] {menu_id}")


@menu_app.command("rm")
def remove_menu(
    ctx: typer.Context,
    menu_id: str = typer.Argument(..., help="Menu ID"),
) -> None:
    """
    Delete a menu. Daily plans tagged with it are kept.
    """
    store: LocalStore = ctx.obj
    try:
        store.delete_menu(menu_id)
    except ApplicationError as e:
        _fail(e.message)
    console.print("[green]Menu deleted[/green]")


# =============================================================================
# Daily plans
# =============================================================================


@plan_app.command("show")
def show_plan(
    ctx: typer.Context,
    date: str = typer.Argument(..., help="ISO date or datetime"),
) -> None:
    """
    Show the plan for a date, or that the date is unplanned.

    Examples:
        cli.py local plan show 2024-06-01
    """
    store: LocalStore = ctx.obj
    form = store.get_form(_parse_day(date))

    if not form.exists:
        console.print(f"[yellow]No plan for {form.date.isoformat()}[/yellow]")
        return

    table = Table(title=f"Plan for {form.date.isoformat()}", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("ID", form.id)
    table.add_row("Menu", form.selection.menu_id or "-")
    table.add_row("First course", form.selection.first_course_id or "-")
    table.add_row("Second course", form.selection.second_course_id or "-")
    table.add_row("Dessert", form.selection.dessert_id or "-")
    console.print(table)


@plan_app.command("save")
def save_plan(
    ctx: typer.Context,
    date: str = typer.Argument(..., help="ISO date or datetime"),
    menu_id: Optional[str] = typer.Option(None, "--menu", "-m", help="Menu ID"),
    first_course_id: Optional[str] = typer.Option(None, "--first", help="First course dish ID"),
    second_course_id: Optional[str] = typer.Option(None, "--second", help="Second course dish ID"),
    dessert_id: Optional[str] = typer.Option(None, "--dessert", help="Dessert dish ID"),
) -> None:
    """
    Save the plan for a date. An existing plan for that day is updated.

    Examples:
        cli.py local plan save 2024-06-01 --menu M1 --first D1
    """
    store: LocalStore = ctx.obj
    try:
        daily_menu, created = store.save_daily_menu(
            DailyMenuSave(
                date=_parse_day(date),
                menu_id=menu_id,
                first_course_id=first_course_id,
                second_course_id=second_course_id,
                dessert_id=dessert_id,
            )
        )
    except PydanticValidationError as e:
        _fail(str(e))
    except ApplicationError as e:
        _fail(e.message)

    if created:
        console.print(f"[green]Daily menu saved[/green] {daily_menu.id}")
    else:
        console.print(f"[green]Daily menu updated[/green] {daily_menu.id}")


@plan_app.command("list")
def list_plans(
    ctx: typer.Context,
    date_from: Optional[str] = typer.Option(None, "--from", help="First day to include"),
    date_to: Optional[str] = typer.Option(None, "--to", help="Last day to include"),
) -> None:
    """
    List plans, latest date first.
    """
    store: LocalStore = ctx.obj
    daily_menus = store.list_daily_menus(
        date_from=_parse_day(date_from) if date_from else None,
        date_to=_parse_day(date_to) if date_to else None,
    )

    table = Table(title="Daily Menus", show_header=True)
    table.add_column("Date", style="cyan")
    table.add_column("Menu")
    table.add_column("First")
    table.add_column("Second")
    table.add_column("Dessert")
    table.add_column("ID", style="dim")
    for item in daily_menus:
        table.add_row(
            item.date.isoformat(),
            item.menu_id or "-",
            item.first_course_id or "-",
            item.second_course_id or "-",
            item.dessert_id or "-",
            item.id,
        )
    console.print(table)


@plan_app.command("dates")
def planned_dates(ctx: typer.Context) -> None:
    """
    Print the days that already have a plan.
    """
    store: LocalStore = ctx.obj
    for day in store.get_planned_dates():
        console.print(day)


@plan_app.command("rm")
def remove_plan(
    ctx: typer.Context,
    daily_menu_id: str = typer.Argument(..., help="Daily menu ID"),
) -> None:
    """
    Delete a plan.
    """
    store: LocalStore = ctx.obj
    try:
        store.delete_daily_menu(daily_menu_id)
    except ApplicationError as e:
        _fail(e.message)
    console.print("[green]Daily menu deleted[/green]")
