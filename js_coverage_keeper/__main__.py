from js_coverage_keeper.cli import main

main()
