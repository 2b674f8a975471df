from __future__ import annotations

from datetime import date
from typing import Callable, List, Optional

import click

from application.services import (
    add_product,
    add_review,
    login,
    parse_amount,
    purchase,
    register_user,
    top_up,
    view_all_reviews,
    view_reviews,
    withdraw,
)
from domain.models import User, UserDraft, UserKind
from domain.repositories import ProductRepository, UserRepository


def _ask(text: str, hide_input: bool = False) -> str:
    """Prompt for one line of input; an empty answer is allowed."""

    return click.prompt(
        text,
        default="",
        show_default=False,
        hide_input=hide_input,
        prompt_suffix=": ",
    )


def _choose(options: List[str], prompt: str) -> Optional[int]:
    """
    Print a numbered list and return the zero-based index picked by the
    user, or None for an invalid choice.
    """

    for i, option in enumerate(options, start=1):
        click.echo(f"{i}. {option}")
    try:
        choice = int(_ask(prompt))
    except ValueError:
        return None
    if 1 <= choice <= len(options):
        return choice - 1
    return None


def create_marketplace_shell(
    user_repo: UserRepository,
    product_repo: ProductRepository,
    seller_code: str,
) -> Callable[[], None]:
    """
    Build the interactive menu loop and return a callable that runs it.

    This module contains only console concerns: prompting, parsing typed
    input and printing results returned by the application services.
    """

    def show_products() -> None:
        click.echo("Available products:")
        for product in product_repo.get_all_products():
            click.echo(str(product))

    def handle_register() -> None:
        click.echo("\n--- Registration ---")
        login_name = _ask("Login")
        email = _ask("Email")
        password = _ask("Password", hide_input=True)

        click.echo("User type:")
        click.echo("1. Buyer")
        click.echo("2. Seller")
        option = _ask("Choose 1 or 2")

        code = None
        if option == "1":
            kind = UserKind.BUYER
        elif option == "2":
            kind = UserKind.SELLER
            code = _ask("Seller authorization code")
        else:
            click.echo("Unknown option.")
            return

        draft = UserDraft(
            kind=kind,
            login=login_name,
            email=email,
            password=password,
            register_date=date.today().isoformat(),
        )
        result = register_user(draft, user_repo, code, seller_code)
        click.echo(result.message if result.success else result.error_message)

    def handle_login() -> None:
        click.echo("\n--- Login ---")
        login_name = _ask("Login")
        password = _ask("Password", hide_input=True)

        result = login(login_name, password, user_repo)
        if not result.success:
            click.echo(result.error_message)
            return

        user = result.user
        click.echo(result.message)
        click.echo(f"Info: {user.user_info()}")

        if user.is_seller:
            seller_menu(user)
        else:
            buyer_menu(user)

    def seller_menu(seller: User) -> None:
        while True:
            click.echo("\n--- SELLER MENU ---")
            click.echo("1. Add product")
            click.echo("2. Show products")
            click.echo("3. Withdraw funds")
            click.echo("0. Log out")
            option = _ask("Choose an option")

            if option == "1":
                name = _ask("Product name")
                description = _ask("Description")
                price = parse_amount(_ask("Price"))
                if price is None:
                    click.echo("Invalid price!")
                    continue
                result = add_product(seller, name, price, description, product_repo)
                click.echo(result.message if result.success else result.error_message)
            elif option == "2":
                show_products()
            elif option == "3":
                amount = parse_amount(_ask("Amount to withdraw"))
                if amount is None:
                    click.echo("Invalid amount or insufficient funds.")
                    continue
                result = withdraw(seller, amount, user_repo)
                if result.success:
                    click.echo(result.message)
                else:
                    click.echo("Invalid amount or insufficient funds.")
            elif option == "0":
                return
            else:
                click.echo("Unknown option.")

    def handle_purchase(buyer: User) -> None:
        products = product_repo.get_all_products()
        if not products:
            click.echo("No products available.")
            return

        index = _choose(
            [f"{p.name} - {p.description} ({p.price} PLN) - {p.seller.login}" for p in products],
            "Choose product number",
        )
        if index is None:
            click.echo("Invalid choice.")
            return

        result = purchase(buyer, products[index], user_repo)
        click.echo(result.message if result.success else result.error_message)

    def handle_add_review(buyer: User) -> None:
        sellers = product_repo.get_sellers_with_products()
        if not sellers:
            click.echo("No products to review.")
            return

        click.echo("Sellers with products:")
        index = _choose([s.login for s in sellers], "Choose the seller to review")
        if index is None:
            click.echo("Invalid seller choice.")
            return

        text = _ask("Review")
        try:
            rating = int(_ask("Rating (1-5)"))
        except ValueError:
            rating = 0

        result = add_review(buyer, sellers[index].login, text, rating)
        click.echo(result.message if result.success else result.error_message)

    def handle_view_reviews(buyer: User) -> None:
        sellers = product_repo.get_sellers_with_products()
        if not sellers:
            click.echo("No sellers to show reviews for.")
            return

        click.echo("Sellers with products:")
        index = _choose([s.login for s in sellers], "Choose a seller to see reviews")
        if index is None:
            click.echo("Invalid choice.")
            return

        seller_login = sellers[index].login
        click.echo(f"Reviews for seller '{seller_login}':")
        for review in view_reviews(buyer, seller_login):
            click.echo(review)

    def buyer_menu(buyer: User) -> None:
        while True:
            click.echo("\n--- BUYER MENU ---")
            click.echo("1. Show products")
            click.echo("2. Buy product")
            click.echo("3. Show balance")
            click.echo("4. Top up balance")
            click.echo("5. Write a review")
            click.echo("6. Show reviews")
            click.echo("7. Show all my reviews")
            click.echo("0. Log out")
            option = _ask("Choose an option")

            if option == "1":
                show_products()
            elif option == "2":
                handle_purchase(buyer)
            elif option == "3":
                click.echo(f"Balance: {buyer.balance} PLN")
            elif option == "4":
                amount = parse_amount(_ask("Amount to top up"))
                if amount is None:
                    click.echo("Invalid amount.")
                    continue
                result = top_up(buyer, amount, user_repo)
                click.echo(result.message if result.success else "Invalid amount.")
            elif option == "5":
                handle_add_review(buyer)
            elif option == "6":
                handle_view_reviews(buyer)
            elif option == "7":
                reviews = view_all_reviews(buyer)
                if not reviews:
                    click.echo("You have not written any reviews yet.")
                for review in reviews:
                    click.echo(review)
            elif option == "0":
                return
            else:
                click.echo("Unknown option.")

    def run() -> None:
        try:
            while True:
                click.echo("\n==== MENU ====")
                click.echo("1. Register")
                click.echo("2. Log in")
                click.echo("0. Exit")
                option = _ask("Choose an option")

                if option == "1":
                    handle_register()
                elif option == "2":
                    handle_login()
                elif option == "0":
                    break
                else:
                    click.echo("Invalid choice.")
        except click.Abort:
            # End of input.
            click.echo()
        click.echo("Program finished.")

    return run
