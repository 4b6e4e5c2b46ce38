"""Example 01: Projects, notes and occurrences in one DynamoDB table.

This example walks through the storage adapter against DynamoDB Local:
- Building the adapter from a DynamoDbConfig (creating the table on first use)
- Creating a project, a vulnerability note and two occurrences of it
- Listing with continuation tokens
- Following an occurrence to its note, and a note to its occurrences
- Conflict and not-found errors

Start DynamoDB Local first:
  docker run -p 8000:8000 amazon/dynamodb-local

Any credentials work against DynamoDB Local, e.g.
  AWS_ACCESS_KEY_ID=local AWS_SECRET_ACCESS_KEY=local python examples/example_01_basic_usage.py
"""

from grafeas_dynamodb import (
    AlreadyExistsError,
    DynamoDbConfig,
    Note,
    NoteKind,
    NotFoundError,
    Occurrence,
    Project,
    Resource,
    configure_logging,
    open_storage,
)


def main():
    """Run the basic usage example."""
    configure_logging(level="INFO")

    print("=" * 80)
    print("EXAMPLE 01: BASIC USAGE")
    print("=" * 80)

    config = DynamoDbConfig(
        table_name="grafeas-example",
        region="us-east-1",
        endpoint_url="http://localhost:8000",
        create_table=True,
    )
    storage = open_storage(config)

    # Section 1: projects and notes
    print("\nSECTION 1: PROJECTS AND NOTES")
    try:
        storage.create_project("vendor", Project())
    except AlreadyExistsError as e:
        print(f"  (re-run) {e}")

    try:
        note = storage.create_note(
            "vendor",
            "CVE-2024-3094",
            "example",
            Note(
                short_description="CVE-2024-3094",
                long_description="Backdoor in xz/liblzma 5.6.0 and 5.6.1",
                kind=NoteKind.VULNERABILITY,
            ),
        )
        print(f"  Created {note.name} at {note.create_time}")
    except AlreadyExistsError:
        note = storage.get_note("vendor", "CVE-2024-3094")
        print(f"  Found existing {note.name}")

    # Section 2: occurrences reference the note from another project
    print("\nSECTION 2: OCCURRENCES")
    if not _exists(storage, "app"):
        storage.create_project("app", Project())
    for image in ("registry.example/app@sha256:aaa", "registry.example/app@sha256:bbb"):
        occ = storage.create_occurrence(
            "app",
            "example",
            Occurrence(note_name=note.name, kind=NoteKind.VULNERABILITY, resource=Resource(uri=image)),
        )
        print(f"  {occ.name} -> {occ.note_name}")

    # Section 3: paging
    print("\nSECTION 3: PAGING (page_size=1)")
    occurrences, token = storage.list_occurrences("app", page_size=1)
    page = 1
    while True:
        for occ in occurrences:
            print(f"  page {page}: {occ.resource.uri if occ.resource else ''}")
        if not token:
            break
        occurrences, token = storage.list_occurrences("app", page_size=1, page_token=token)
        page += 1

    # Section 4: relationships
    print("\nSECTION 4: RELATIONSHIPS")
    linked, _ = storage.list_note_occurrences("vendor", "CVE-2024-3094")
    print(f"  {note.name} has {len(linked)} occurrence(s)")
    first_id = linked[0].name.rsplit("/", 1)[1]
    print(f"  {linked[0].name} references {storage.get_occurrence_note('app', first_id).name}")

    # Section 5: errors
    print("\nSECTION 5: ERRORS")
    try:
        storage.get_note("vendor", "CVE-0000-0000")
    except NotFoundError as e:
        print(f"  NotFoundError: {e}")

    for occ in linked:
        storage.delete_occurrence("app", occ.name.rsplit("/", 1)[1])
    print(f"\n  Cleaned up {len(linked)} occurrence(s)")


def _exists(storage, project_id):
    try:
        storage.get_project(project_id)
    except NotFoundError:
        return False
    return True


if __name__ == "__main__":
    main()
