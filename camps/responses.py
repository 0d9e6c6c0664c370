"""
Write-result payloads.

The front-end was built against raw document-store write results, so
inserts, updates and deletes answer with the same acknowledgement
shapes.
"""


def inserted(object_id, **extra) -> dict:
    return {'acknowledged': True, 'insertedId': object_id, **extra}


def updated(matched: int, modified: int) -> dict:
    return {'acknowledged': True, 'matchedCount': matched, 'modifiedCount': modified}


def deleted(count: int) -> dict:
    return {'acknowledged': True, 'deletedCount': count}
