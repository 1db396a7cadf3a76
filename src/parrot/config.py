from typing import Optional

# where the dictionary is persisted (JSON)
DICTIONARY_PATH: str = "dictionary.json"
ENCODING: str = "utf-8"

# learn from every processed line
LEARN: bool = True

# rebuild the word index right after load when it is missing
REBUILD_ON_LOAD: bool = True

# write the dictionary back when the engine shuts down
SAVE_ON_SHUTDOWN: bool = True

# None -> seeded from the OS
RANDOM_SEED: Optional[int] = None

# Progress logging (set PARROT_VERBOSE=1 to enable)
VERBOSE_ENV: str = "PARROT_VERBOSE"
