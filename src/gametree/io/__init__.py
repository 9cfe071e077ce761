from .errors import LoaderError
from .tree_io import LearnAnswers, load_answers, load_run, load_tree, run_to_dict, save_run, save_tree

__all__ = [
    "LearnAnswers",
    "LoaderError",
    "load_answers",
    "load_run",
    "load_tree",
    "run_to_dict",
    "save_run",
    "save_tree",
]
