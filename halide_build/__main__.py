from halide_build.cli import main

main()
