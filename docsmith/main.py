"""CLI entry point for docsmith."""

import argparse
import sys
from pathlib import Path

from docsmith import config
from docsmith.core.downloader import ConcurrentFetcher
from docsmith.core.errors import ArchiveError, DocNotFound
from docsmith.core.generator import Generator
from docsmith.core.manifest import ManifestBuilder
from docsmith.core.models import JobStatus, Version
from docsmith.core.packager import Packager
from docsmith.core.store import DocStore
from docsmith.core.sync import S3Sync
from docsmith.registry import Registry, default_registry


def _context(args) -> tuple[Registry, DocStore, ManifestBuilder]:
    registry = default_registry()
    store = DocStore(args.docs_path)
    return registry, store, ManifestBuilder(store, registry.all())


def _resolve_all(registry: Registry, tokens: list[str]) -> list[Version]:
    versions: list[Version] = []
    for token in tokens:
        for version in registry.resolve(token):
            if version not in versions:
                versions.append(version)
    return versions


def list_command(args):
    """Handle the list subcommand."""
    registry, store, _ = _context(args)

    for source in registry.all():
        if not args.versions:
            print(f"{source.slug:<20} {source.name}")
            continue
        for version in source.versions:
            installed = " (installed)" if store.is_installed(version) else ""
            print(f"{version.path:<20} {version.label}{installed}")


def page_command(args):
    """Handle the page subcommand: print one normalized page."""
    registry, store, manifest = _context(args)
    version = registry.resolve(args.doc)[0]

    page = Generator(store, manifest).page(version, args.path)
    print(page.to_html())


def generate_command(args):
    """Handle the generate subcommand."""
    registry, store, manifest = _context(args)
    versions = registry.resolve(args.doc)
    if args.all_versions:
        versions = list(versions[0].source.versions)

    ok = Generator(store, manifest).generate_versions(versions)
    if not ok:
        sys.exit(1)


def manifest_command(args):
    """Handle the manifest subcommand."""
    _, _, manifest = _context(args)
    manifest.build()


def download_command(args):
    """Handle the download subcommand."""
    registry, store, manifest = _context(args)

    if args.all:
        versions = registry.versions()
    elif args.installed:
        versions = store.installed(registry.versions())
    else:
        versions = _resolve_all(registry, args.docs)

    if not versions:
        print("Nothing to download. Pass documentation names, --installed or --all.")
        return

    fetcher = ConcurrentFetcher(docs_path=store.root, download_url=args.url, workers=args.workers)
    print(f"Downloading {len(versions)} documentations with {fetcher.workers} workers...")
    jobs = fetcher.run(fetcher.jobs_for(versions))

    manifest.build()

    failed = [job for job in jobs if job.status is JobStatus.FAILED]
    print(f"\nComplete! {len(jobs) - len(failed)} downloaded, {len(failed)} failed")


def package_command(args):
    """Handle the package subcommand."""
    registry, store, _ = _context(args)
    versions = store.installed(registry.versions()) if args.all else _resolve_all(registry, args.docs)

    packager = Packager(store)
    failed = 0
    for version in versions:
        try:
            packager.package(version)
        except ArchiveError as e:
            print(f"Error: {e}", file=sys.stderr)
            failed += 1

    if failed:
        sys.exit(1)


def clean_command(args):
    """Handle the clean subcommand."""
    registry, store, _ = _context(args)
    removed = Packager(store).clean(registry.versions())
    for path in removed:
        print(f"Removed: {path}")
    print(f"Deleted {len(removed)} packages")


def upload_command(args):
    """Handle the upload subcommand."""
    registry, store, _ = _context(args)
    versions = store.installed(registry.versions()) if args.all else _resolve_all(registry, args.docs)

    sync = S3Sync(bucket=args.bucket, dry_run=args.dry_run)
    for version in versions:
        if not store.is_installed(version):
            print(f"Skipping {version.label}: not generated", file=sys.stderr)
            continue

        print(f"\n[{version.label}]")
        sync.sync(store.version_dir(version), version.path)

        package = store.package_path(version)
        if package.exists():
            sync.sync_file(package, package.name)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Build, package and download normalized documentation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate the newest CakePHP API docs
  docsmith generate cakephp

  # Generate every CakePHP version (manifest only updated if all succeed)
  docsmith generate cakephp@all

  # Download prebuilt packages
  docsmith download cakephp@3.10 underscore
        """
    )
    parser.add_argument(
        "--docs-path",
        type=Path,
        default=config.DOCS_PATH,
        dest="docs_path",
        help=f"Documentation directory (default: {config.DOCS_PATH})"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # List subcommand
    list_parser = subparsers.add_parser("list", help="List available documentations")
    list_parser.add_argument(
        "-v", "--versions",
        action="store_true",
        help="List every version and whether it is installed"
    )
    list_parser.set_defaults(func=list_command)

    # Page subcommand
    page_parser = subparsers.add_parser("page", help="Print one normalized page")
    page_parser.add_argument("doc", help="Documentation name, optionally name@version")
    page_parser.add_argument("path", help="Page path relative to the documentation root")
    page_parser.set_defaults(func=page_command)

    # Generate subcommand
    generate_parser = subparsers.add_parser("generate", help="Scrape and normalize a documentation")
    generate_parser.add_argument("doc", help="name, name@version or name@all")
    generate_parser.add_argument(
        "--all-versions",
        action="store_true",
        dest="all_versions",
        help="Generate every version of the documentation"
    )
    generate_parser.set_defaults(func=generate_command)

    # Manifest subcommand
    manifest_parser = subparsers.add_parser("manifest", help="Rebuild manifest.json")
    manifest_parser.set_defaults(func=manifest_command)

    # Download subcommand
    download_parser = subparsers.add_parser("download", help="Download prebuilt documentation packages")
    download_parser.add_argument("docs", nargs="*", help="name or name@version")
    download_parser.add_argument("--all", action="store_true", help="Download every version")
    download_parser.add_argument("--installed", action="store_true", help="Update installed versions")
    download_parser.add_argument(
        "--url",
        default=config.DOWNLOAD_URL,
        help=f"Package server (default: {config.DOWNLOAD_URL})"
    )
    download_parser.add_argument(
        "-w", "--workers",
        type=int,
        default=config.DOWNLOAD_WORKERS,
        help=f"Parallel downloads (default: {config.DOWNLOAD_WORKERS})"
    )
    download_parser.set_defaults(func=download_command)

    # Package subcommand
    package_parser = subparsers.add_parser("package", help="Package generated documentations")
    package_parser.add_argument("docs", nargs="*", help="name or name@version")
    package_parser.add_argument("--all", action="store_true", help="Package every installed version")
    package_parser.set_defaults(func=package_command)

    # Clean subcommand
    clean_parser = subparsers.add_parser("clean", help="Delete packages")
    clean_parser.set_defaults(func=clean_command)

    # Upload subcommand
    upload_parser = subparsers.add_parser("upload", help="Sync documentations and packages to S3")
    upload_parser.add_argument("docs", nargs="*", help="name or name@version")
    upload_parser.add_argument("--all", action="store_true", help="Upload every installed version")
    upload_parser.add_argument("--bucket", default=config.S3_BUCKET, help=f"Bucket (default: {config.S3_BUCKET})")
    upload_parser.add_argument("--dry-run", action="store_true", dest="dry_run", help="Only print the changes")
    upload_parser.set_defaults(func=upload_command)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    try:
        args.func(args)
    except DocNotFound as e:
        print(f"Error: {e}", file=sys.stderr)
        print("Run 'docsmith list' to see the available documentations.", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
