from importlib import import_module

from expense_tracker.storage.base import BaseStorage, StorageError


def get_storage(name, config):
    path = config['storage_modules'][name]
    module_name, cls_name = path.rsplit('.', 1)
    mod = import_module(module_name)
    return getattr(mod, cls_name)(config)
