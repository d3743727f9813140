from create_scaffoldly.pipeline import main

main()
