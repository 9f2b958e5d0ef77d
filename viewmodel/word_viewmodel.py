from concurrent.futures import Future

from db.models import Word
from repository.word_repository import WordRepository
from viewmodel.base import ViewModel, ViewModelFactory
from viewmodel.live_data import FlowLiveData


class WordViewModel(ViewModel):
    def __init__(self, repository: WordRepository):
        super().__init__()
        self._repository = repository
        self.all_words: FlowLiveData[list[Word]] = self.add_closeable(
            FlowLiveData(repository.all_words, initial=[])
        )

    def insert(self, word: Word) -> Future:
        """Queue the write and return at once; failures are only logged."""
        if not word.word.strip():
            raise ValueError("La palabra no puede estar vacia")
        return self.launch(self._repository.insert, word)


class WordViewModelFactory(ViewModelFactory):
    def __init__(self, repository: WordRepository):
        self._repository = repository

    def create(self, model_class: type) -> ViewModel:
        # Any class a WordViewModel can stand in for, ViewModel included
        if issubclass(WordViewModel, model_class):
            return WordViewModel(self._repository)
        raise ValueError("Unknown ViewModel class")
