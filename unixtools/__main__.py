from unixtools.launcher import main

if __name__ == "__main__":
    main()
