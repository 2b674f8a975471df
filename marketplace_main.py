import logging

import click
from dotenv import load_dotenv

from application.services import DEFAULT_SELLER_CODE
from infrastructure.files.product_repository_file import FileProductRepository
from infrastructure.files.user_repository_file import FileUserRepository
from interfaces.cli.handlers import create_marketplace_shell


@click.command()
@click.option("--users-file", envvar="USERS_FILE", default="users.txt", show_default=True)
@click.option("--products-file", envvar="PRODUCTS_FILE", default="products.txt", show_default=True)
@click.option("--seller-code", envvar="SELLER_CODE", default=DEFAULT_SELLER_CODE)
@click.option(
    "--persist-balances/--no-persist-balances",
    envvar="PERSIST_BALANCES",
    default=False,
    help="Store balances as an extra column of the users file.",
)
@click.option(
    "--log-level",
    envvar="LOG_LEVEL",
    default="WARNING",
    show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
)
def main(
    users_file: str,
    products_file: str,
    seller_code: str,
    persist_balances: bool,
    log_level: str,
) -> None:
    """Run the interactive marketplace."""

    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    user_repo = FileUserRepository(users_file, persist_balances=persist_balances)
    product_repo = FileProductRepository(products_file, user_repo)

    run = create_marketplace_shell(user_repo, product_repo, seller_code)
    run()


def cli() -> None:
    load_dotenv()
    main()


if __name__ == "__main__":
    cli()
