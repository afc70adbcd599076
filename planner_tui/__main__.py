from planner_tui.run import main

main()
