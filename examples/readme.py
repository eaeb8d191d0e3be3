import logging
import os

import index_pool


def main():
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "WARNING"))
    pool = index_pool.IndexPool()

    a = pool.new_id()
    b = pool.new_id()
    c = pool.new_id()

    data = [""] * pool.maximum()
    data[a] = "apple"
    data[b] = "banana"
    data[c] = "coconut"

    # Nevermind, no bananas
    pool.return_id(b)

    p = pool.new_id()
    data[p] = "pineapple"

    print(data)
    print(pool.in_use(), "indices in use:", list(pool.all_indices()))


main()
