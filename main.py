# main.py
import click
import requests

import fetcher
from agent import Assistant, READY_WAIT_SECONDS
from crawler import DEFAULT_LINK_LIMIT
from models import Page

_EXIT_WORDS = {"exit", "quit", ":q"}


def _load_page(site: str, verbose: bool) -> tuple[Page, requests.Session]:
    """Fetch the start page once; it plays the role of the hosting page."""
    if "://" not in site:
        site = "https://" + site
    http = fetcher.new_session()
    html = fetcher.fetch_page(site, http, log=click.echo if verbose else (lambda _m: None))
    if html is None:
        raise click.ClickException(f"Could not fetch {site}")
    return Page(url=site, html=html), http


def _assistant(site: str, pages: int, wait: float, workers: int,
               verbose: bool, open_links: bool = False) -> Assistant:
    page, http = _load_page(site, verbose)
    return Assistant(page, http=http, emit=click.echo,
                     open_link=click.launch if open_links else None,
                     verbose=verbose, link_limit=pages,
                     workers=workers, wait_seconds=wait)


def _crawl_options(f):
    f = click.option("-v", "--verbose", is_flag=True, help="Print fetch/crawl steps.")(f)
    f = click.option("--workers", default=fetcher.THREAD_POOL_WORKERS, show_default=True,
                     help="Concurrent page fetches")(f)
    f = click.option("--wait", default=READY_WAIT_SECONDS, show_default=True,
                     help="Seconds a question waits for the index")(f)
    f = click.option("--pages", default=DEFAULT_LINK_LIMIT, show_default=True,
                     help="Max linked pages to crawl")(f)
    return f


@click.group()
def cli() -> None:
    """CLI for the site assistant: ask a website questions, or reach its mentor."""
    pass


@cli.command()
@click.argument("site")
@click.argument("question", nargs=-1, required=True)
@_crawl_options
def ask(site: str, question: tuple[str, ...], pages: int, wait: float,
        workers: int, verbose: bool) -> None:
    """Answer one QUESTION from the content of SITE."""
    bot = _assistant(site, pages, wait, workers, verbose)
    bot.handle_question(" ".join(question))


@cli.command()
@click.argument("site")
@_crawl_options
def chat(site: str, pages: int, wait: float, workers: int, verbose: bool) -> None:
    """Interactive session; type 'exit' to leave."""
    bot = _assistant(site, pages, wait, workers, verbose, open_links=True)
    bot.activate()
    click.echo(click.style("Ask about classes, timings, benefits, etc.", fg="cyan"))
    while True:
        try:
            line = click.prompt("you", default="", show_default=False)
        except (click.Abort, EOFError):
            break
        if line.strip().lower() in _EXIT_WORDS:
            break
        bot.handle_question(line)


@cli.command()
@click.argument("site")
@_crawl_options
def crawl(site: str, pages: int, wait: float, workers: int, verbose: bool) -> None:
    """
    Warm-up crawler: index SITE and list the pages that made it in.
    """
    bot = _assistant(site, pages, wait, workers, verbose)
    click.echo(f"Crawling {site} …")
    bot.activate()
    bot.join()
    if bot.memory.index is None:
        raise click.ClickException("Index build failed; rerun with -v for details.")
    for doc in bot.memory.documents:
        click.echo(f"  {doc.title}  {doc.url}")
    click.echo(click.style(f"✓ Indexed {len(bot.memory.documents)} pages.", fg="green"))


@cli.command()
@click.argument("site")
@click.option("--open", "open_links", is_flag=True, help="Open the WhatsApp link in a browser.")
@click.option("-v", "--verbose", is_flag=True, help="Print fetch steps.")
def contact(site: str, open_links: bool, verbose: bool) -> None:
    """Print the mentor's WhatsApp link for SITE."""
    page, http = _load_page(site, verbose)
    bot = Assistant(page, http=http, emit=click.echo,
                    open_link=click.launch if open_links else None)
    bot.connect_to_mentor()
    if bot.last_link is None:
        click.get_current_context().exit(1)


if __name__ == "__main__":
    cli()
