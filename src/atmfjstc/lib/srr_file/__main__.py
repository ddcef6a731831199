from atmfjstc.lib.srr_file.cli import main


main()
