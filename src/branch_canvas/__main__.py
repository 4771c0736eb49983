from branch_canvas.cli import main

main()
