from viewmodel.base import ViewModel
from viewmodel.live_data import LiveData, MutableLiveData


# Deprecated sample screen, kept for reference next to the word list
class HelloViewModel(ViewModel):
    def __init__(self):
        super().__init__()
        self._name = MutableLiveData("")
        self.name: LiveData[str] = self._name

    def on_name_change(self, new_name: str):
        self._name.set_value(new_name)
