from tplpatch.exceptions.core import TplPatchError


class StorageError(TplPatchError):
    """Base class for template storage failures."""

    log_category = 'storage_error'


class CannotLoadError(StorageError):
    """Template could not be found in the storage."""

    log_category = 'template_load_failed'
    code = 1


class CannotBackupError(StorageError):
    """Existing template could not be renamed to its backup name."""

    log_category = 'template_backup_failed'
    code = 2


class CannotSaveError(StorageError):
    """Template contents could not be written to the storage."""

    log_category = 'template_save_failed'
    code = 3
