from .search import main

main()
