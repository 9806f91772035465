from PyQt6 import QtCore, QtWidgets

from lanshare.constants import (
    ETA_COMPUTING,
    SPEED_UNIT,
    STATUS_READY,
    WINDOW_HEIGHT,
    WINDOW_TITLE,
    WINDOW_WIDTH,
)

class Ui_MainWindow(object):
    def setupUi(self, MainWindow: QtWidgets.QMainWindow):
        MainWindow.setObjectName("MainWindow")
        MainWindow.resize(WINDOW_WIDTH, WINDOW_HEIGHT)
        MainWindow.setWindowTitle(WINDOW_TITLE)
        MainWindow.setStyleSheet("background-color: rgb(27, 38, 54); color: white;")

        self.centralwidget = QtWidgets.QWidget(parent=MainWindow)
        self.centralwidget.setObjectName("centralwidget")
        self.mainLayout = QtWidgets.QVBoxLayout(self.centralwidget)

        self.stackedWidget = QtWidgets.QStackedWidget(parent=self.centralwidget)
        self.stackedWidget.setObjectName("stackedWidget")
        self.mainLayout.addWidget(self.stackedWidget)

        # Home
        self.homePage = QtWidgets.QWidget()
        self.homePage.setObjectName("homePage")
        homeLayout = QtWidgets.QVBoxLayout(self.homePage)
        homeLayout.addStretch()
        self.homeTitleLabel = QtWidgets.QLabel(WINDOW_TITLE, parent=self.homePage)
        self.homeTitleLabel.setAlignment(QtCore.Qt.AlignmentFlag.AlignCenter)
        homeLayout.addWidget(self.homeTitleLabel)
        self.goSendButton = QtWidgets.QPushButton("Send", parent=self.homePage)
        homeLayout.addWidget(self.goSendButton)
        self.goReceiveButton = QtWidgets.QPushButton("Receive", parent=self.homePage)
        homeLayout.addWidget(self.goReceiveButton)
        homeLayout.addStretch()
        self.stackedWidget.addWidget(self.homePage)

        # Send
        self.sendPage = QtWidgets.QWidget()
        self.sendPage.setObjectName("sendPage")
        sendLayout = QtWidgets.QVBoxLayout(self.sendPage)
        self.sendBackButton = QtWidgets.QPushButton("Back", parent=self.sendPage)
        sendLayout.addWidget(self.sendBackButton)
        self.dropZoneButton = QtWidgets.QPushButton("Click to choose a file or folder", parent=self.sendPage)
        self.dropZoneButton.setMinimumHeight(120)
        sendLayout.addWidget(self.dropZoneButton)
        self.selectedFilesWidget = QtWidgets.QWidget(parent=self.sendPage)
        self.fileList = QtWidgets.QListWidget(parent=self.selectedFilesWidget)
        selectedLayout = QtWidgets.QVBoxLayout(self.selectedFilesWidget)
        selectedLayout.addWidget(self.fileList)
        self.selectedFilesWidget.hide()
        sendLayout.addWidget(self.selectedFilesWidget)
        self.sendButton = QtWidgets.QPushButton("Send", parent=self.sendPage)
        sendLayout.addWidget(self.sendButton)
        self.resetSendButton = QtWidgets.QPushButton("Reset", parent=self.sendPage)
        sendLayout.addWidget(self.resetSendButton)
        self.sendStatusLabel = QtWidgets.QLabel(STATUS_READY, parent=self.sendPage)
        sendLayout.addWidget(self.sendStatusLabel)
        self.sendProgress = self._setup_progress(self.sendPage, sendLayout)
        sendLayout.addStretch()
        self.stackedWidget.addWidget(self.sendPage)

        # Receive
        self.receivePage = QtWidgets.QWidget()
        self.receivePage.setObjectName("receivePage")
        receiveLayout = QtWidgets.QVBoxLayout(self.receivePage)
        self.receiveBackButton = QtWidgets.QPushButton("Back", parent=self.receivePage)
        receiveLayout.addWidget(self.receiveBackButton)
        self.receiveStatusLabel = QtWidgets.QLabel("", parent=self.receivePage)
        receiveLayout.addWidget(self.receiveStatusLabel)
        self.receiveProgress = self._setup_progress(self.receivePage, receiveLayout)
        self.resetReceiveButton = QtWidgets.QPushButton("Reset", parent=self.receivePage)
        receiveLayout.addWidget(self.resetReceiveButton)
        receiveLayout.addStretch()
        self.stackedWidget.addWidget(self.receivePage)

        MainWindow.setCentralWidget(self.centralwidget)

    def _setup_progress(self, parent: QtWidgets.QWidget, layout: QtWidgets.QVBoxLayout) -> dict:
        bar = QtWidgets.QProgressBar(parent=parent)
        bar.setRange(0, 1000) # Tenths of a percent
        bar.setTextVisible(False)
        layout.addWidget(bar)

        row = QtWidgets.QHBoxLayout()
        percent = QtWidgets.QLabel("0%", parent=parent)
        speed = QtWidgets.QLabel(f"0 {SPEED_UNIT}", parent=parent)
        eta = QtWidgets.QLabel(ETA_COMPUTING, parent=parent)
        current_file = QtWidgets.QLabel("", parent=parent)

        for label in (percent, speed, eta):
            row.addWidget(label)

        layout.addLayout(row)
        layout.addWidget(current_file)

        return {"bar": bar, "percent": percent, "speed": speed, "eta": eta, "file": current_file}
