from .apply import command as apply_cmd
from .rollback import command as rollback_cmd
from .sets import command as sets_cmd

__all__ = ['apply_cmd', 'rollback_cmd', 'sets_cmd']
