"""MongoDB index management utilities.

Shared index creation with conflict resolution, used by each MongoXxxRepository.
"""

from logging import getLogger

from pymongo.errors import PyMongoError

logger = getLogger(__name__)

# IndexOptionsConflict, IndexKeySpecsConflict
_INDEX_CONFLICT_CODES = (85, 86)


def create_index_safe(collection, keys: list, name: str, **kwargs) -> bool:
    """Create index with conflict resolution.

    Handles three conflict scenarios:
    - Same name but different key definition (schema migration)
    - Same key definition but different name (rename)
    - Same name and keys but different options (e.g. an index that later became unique)

    In every case, drops the conflicting index and recreates with the desired definition.
    """
    try:
        collection.create_index(keys, name=name, **kwargs)
        return True
    except PyMongoError as e:
        is_conflict = (
            getattr(e, 'code', None) in _INDEX_CONFLICT_CODES
            or "already exists" in str(e)
            or "Conflict" in str(e)
        )
        if not is_conflict:
            raise
        return _resolve_conflict(collection, keys, name, **kwargs)


def _resolve_conflict(collection, keys: list, name: str, **kwargs) -> bool:
    """Drop conflicting index and recreate."""
    keys_dict = dict(keys)

    for idx_name, idx_info in collection.index_information().items():
        if idx_name == '_id_':
            continue

        idx_keys = dict(idx_info.get('key', []))
        same_name = idx_name == name
        same_keys = idx_keys == keys_dict

        # Both equal means only the options differ, otherwise create_index would have succeeded
        if same_name or same_keys:
            logger.warning(f"Dropping conflicting index: {idx_name}")
            collection.drop_index(idx_name)
            collection.create_index(keys, name=name, **kwargs)
            logger.info(f"Recreated index: {name}")
            return True

    logger.error(f"Failed to resolve index conflict for {name}")
    return False


def ensure_all_indexes(db) -> bool:
    """Ensure indexes for all collections. Called at app startup.

    The unique email index is what makes registration race-free.
    """
    from adapter.mongodb.user_repository import MongoUserRepository
    from adapter.mongodb.booking_repository import MongoBookingRepository
    from adapter.mongodb.payment_repository import MongoPaymentRepository

    results = [
        MongoUserRepository(db).ensure_indexes(),
        MongoBookingRepository(db).ensure_indexes(),
        MongoPaymentRepository(db).ensure_indexes(),
    ]
    return all(results)
