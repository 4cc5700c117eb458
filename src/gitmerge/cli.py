"""Command-line interface for gitmerge."""
import logging
import os
import sys
from typing import Optional, Tuple

import click
from openai import OpenAIError
from rich.markup import escape

from . import __version__
from .ai.chat import ChatSession
from .core.analyzer import RepositoryAnalyzer
from .core.errors import GitMergeError
from .core.models import Config, DEFAULT_IGNORE_EXTENSIONS, MergeProgress
from .core.tokenizer import TokenCounter
from .utils.console import THEMES, ConsoleManager


def setup_logging(debug: bool) -> None:
    """Configure logging based on debug flag."""
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format='[%(levelname)s] %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)]
    )
    
    # Reduce noise from external libraries
    for name in ("aiohttp", "openai", "httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)


def build_config(token: Optional[str], ignore_ext: Tuple[str, ...], batch_size: int,
                 strip_comments: bool, tree: bool, debug: bool) -> Config:
    """Create configuration from CLI options, falling back to the environment."""
    config = Config(
        batch_size=batch_size,
        strip_comments=strip_comments,
        include_tree=tree,
        debug=debug,
    )
    if token:
        config.github_token = token
    if ignore_ext:
        config.ignore_extensions = list(DEFAULT_IGNORE_EXTENSIONS) + [
            ext if ext.startswith(('.', '-')) else f'.{ext}' for ext in ignore_ext
        ]
    return config


@click.command()
@click.argument('repo', required=True)
@click.option('--branch', '-b', default=None, help='Branch or commit; overrides any /tree/<branch> in the URL')
@click.option('--token', envvar='GITHUB_TOKEN', default=None, help='GitHub token (default: $GITHUB_TOKEN)')
@click.option('--ignore-ext', '-x', multiple=True, help='Additional extension to ignore (repeatable)')
@click.option('--include', '-i', multiple=True, help='Only select paths matching this glob (repeatable)')
@click.option('--exclude', '-e', multiple=True, help='Deselect paths matching this glob (repeatable)')
@click.option('--batch-size', type=click.IntRange(min=1), default=5, show_default=True,
              help='Number of files fetched concurrently')
@click.option('--strip-comments', is_flag=True, help='Strip comments from fetched files')
@click.option('--tree', is_flag=True, help='Prefix the output with an ASCII tree of the selected files')
@click.option('--output-dir', '-o', default='.', show_default=True, help='Directory for the merged file')
@click.option('--preview', type=click.IntRange(min=0), default=0, help='Print the first N characters')
@click.option('--exact-tokens', is_flag=True, help='Also count tokens with tiktoken')
@click.option('--ask', '-q', 'questions', multiple=True, help='Ask the chat model about the merged code')
@click.option('--theme', '-t', type=click.Choice(sorted(THEMES)), default='manhattan', help='Terminal color theme')
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.version_option(version=__version__)
def main(repo: str, branch: Optional[str], token: Optional[str], ignore_ext: Tuple[str, ...],
         include: Tuple[str, ...], exclude: Tuple[str, ...], batch_size: int, strip_comments: bool,
         tree: bool, output_dir: str, preview: int, exact_tokens: bool,
         questions: Tuple[str, ...], theme: str, debug: bool) -> None:
    """
    Merge the text files of a GitHub repository into one document.
    
    REPO is a GitHub URL such as https://github.com/owner/repo or
    https://github.com/owner/repo/tree/some/branch.
    
    Examples:
    
        gitmerge https://github.com/pallets/click
        
        gitmerge https://github.com/pallets/click -i 'src/*' --tree
        
        gitmerge https://github.com/pallets/click --ask "How are options parsed?"
    """
    console = ConsoleManager(theme=theme)
    setup_logging(debug)
    
    try:
        config = build_config(token, ignore_ext, batch_size, strip_comments, tree, debug)
        analyzer = RepositoryAnalyzer(config)
        
        console.print(f"[highlight]> REPOSITORY:[/highlight] [path]{escape(repo)}[/path]")
        selection = analyzer.load(repo, branch)
        console.print_info(
            f"{analyzer.repo.full_name}@{analyzer.repo.branch}: {len(selection)} eligible files"
        )
        for warning in analyzer.warnings:
            console.print_warning(warning)
        if config.debug:
            for entry in analyzer.entries:
                reason = analyzer.file_filter.get_excluded_reason(entry) if entry.is_blob else None
                if reason:
                    console.print(f"[dim]  skipped {escape(entry.path)}: {reason}[/dim]")
        
        if include:
            selection.toggle_all(False)
            selection.select_matching(include, True)
        if exclude:
            selection.select_matching(exclude, False)
        
        total = selection.selected_count
        if total == 0:
            console.print_warning("No files selected.")
            return
        
        with console.progress() as progress:
            task = progress.add_task("Fetching files", total=total)
            
            def on_progress(state: MergeProgress) -> None:
                progress.update(task, completed=state.completed)
            
            result = analyzer.merge(on_progress)
        
        output_path = analyzer.save_results(result, output_dir)
        
        console.print_separator()
        console.print_success("MERGE COMPLETE")
        console.print(f"[info]FILES:[/info] [number]{result.total_files}[/number]")
        console.print(f"[info]SIZE:[/info] [number]{result.size_kb:.2f} KB[/number]")
        console.print(f"[info]ESTIMATED TOKENS:[/info] [number]{result.estimated_tokens:,}[/number]")
        if exact_tokens:
            exact = TokenCounter(config.token_encoder).count(result.document)
            console.print(f"[info]TOKENS ({config.token_encoder}):[/info] [number]{exact:,}[/number]")
        console.print(f"[info]OUTPUT:[/info] [path]{os.path.relpath(output_path)}[/path]")
        
        if preview:
            console.print_separator()
            console.print(result.document[:preview], markup=False)
            if len(result.document) > preview:
                console.print("[dim]... (preview truncated, see the output file) ...[/dim]")
        
        if questions:
            session = ChatSession(config)
            session.initialize(result.document)
            for question in questions:
                console.print_separator()
                console.print(f"[accent][?][/accent] {escape(question)}")
                console.print("[accent][<][/accent] ", end="")
                for delta in session.send(question):
                    console.stream(delta)
                console.print()
    
    except GitMergeError as e:
        console.print_error(str(e))
        if debug:
            console.print_exception()
        sys.exit(1)
    
    except OpenAIError as e:
        console.print_error(f"Chat failed: {e}")
        sys.exit(1)
    
    except KeyboardInterrupt:
        console.print_error("PROCESS TERMINATED BY USER")
        sys.exit(1)


if __name__ == '__main__':
    main()
